# Core type aliases for atto's data model.
# Parsed documents are trees of Atom, List and Map (see atto.types.value).
# The evaluator reuses the same tree as code, so the aliases below are
# interchangeable; they only document intent at each seam.
#
# Naming guidance:
# - Document: the result of parsing a whole input (a List or a Map).
# - AttoValue: anything the evaluator can produce or bind, which includes
#   builtins and closures on top of plain values.

from typing import Any, Callable

AttoValue = Any
Document = AttoValue

# Evaluator function type passed to special forms: evaluate_fn(expr, env)
EvaluatorFn = Callable[..., AttoValue]

__version__ = "0.1.0"

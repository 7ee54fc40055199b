"""Registry of special forms for the atto evaluator.

Maps names to handlers that receive their arguments unevaluated and decide
what to evaluate. The evaluator consults this table before ordinary function
application, so special form names cannot be rebound.
"""

from atto.evaluation.special_forms.apply_form import apply_form
from atto.evaluation.special_forms.do_form import do_form
from atto.evaluation.special_forms.eval_form import eval_form
from atto.evaluation.special_forms.if_form import if_form
from atto.evaluation.special_forms.lambda_form import lambda_form
from atto.evaluation.special_forms.let_form import let_form
from atto.evaluation.special_forms.logic_forms import and_form, or_form
from atto.evaluation.special_forms.quote_forms import quote_form

SPECIAL_FORMS = {
    "quote": quote_form,
    "if": if_form,
    "let": let_form,
    "lambda": lambda_form,
    "eval": eval_form,
    "do": do_form,
    "and": and_form,
    "or": or_form,
    "apply": apply_form,
}

from atto.types.value import Atom, Form, List, Map, Value, nil
from atto.types.environment import Environment
from atto.types.callables import Builtin, Closure

# deq: a language whose only data structure is a double-ended queue
__version__ = "0.1.0"

from .tokens import Location, Token
from .lexer import Lexer, tokenize
from .labels import resolve_labels, LabelError
from .errors import DeqError, DeqTypeError, StepLimitExceeded
from .types import DeqValue, DeqType
from .runtime import Interpreter, Outcome, CallFrame
import deq.runtime_ops  # Install operations

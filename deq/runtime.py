"""Execution engine for deq — Part 1: state, dispatch loop and deq access."""
from __future__ import annotations
import sys
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TextIO

from .tokens import Token
from .lexer import Lexer
from .labels import resolve_labels
from .diagnostics import Diagnostic, emit
from .errors import DeqError, DeqTypeError, StepLimitExceeded
from .types import (
    DeqValue, DeqType, deq_integer, deq_real, deq_string,
    parse_integer, parse_real, unescape,
)


class HaltSignal(Exception):
    """Signal for `exit`."""
    pass


class Outcome(Enum):
    FINISHED = "finished"  # ran off the end of the program
    EXITED = "exited"      # an `exit` instruction ran


@dataclass(frozen=True)
class CallFrame:
    index: int
    left: bool

    def __str__(self):
        return f"{self.index}({'left' if self.left else 'right'})"


# Words that may appear without a direction marker
BARE_KEYWORDS = ("trace", "ret", "exit")


class Interpreter:
    """The deq interpreter. One instance runs one program."""

    # word -> method name, filled in by runtime_ops
    operations: dict[str, str] = {}

    def __init__(self, source_path: str = "<string>", flags: dict | None = None,
                 stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None,
                 max_steps: Optional[int] = None):
        self.source_path = source_path
        self.flags = flags or {}
        self.debug = bool(self.flags.get("debug", False))
        self.stdout = stdout
        self.stderr = stderr
        self.max_steps = max_steps

        self.tokens: list[Token] = []
        self.labels: dict[str, int] = {}

        # Runtime state
        self.deq: deque[DeqValue] = deque()
        self.call_stack: list[CallFrame] = []
        self.inverted = False
        self.ip = 0
        self.steps = 0

        # Current instruction
        self.token: Optional[Token] = None
        self.left = False

        # Output capture (for testing)
        self.output: list[str] = []
        self.diagnostics: list[Diagnostic] = []

    # ================================================
    # Main execution
    # ================================================

    def run(self, source: str) -> Outcome:
        """Lex and execute a program from source text."""
        lexer = Lexer(source, self.source_path)
        tokens = lexer.tokenize()
        for diag in lexer.diagnostics:
            self.report(diag)
        return self.execute(tokens)

    def execute(self, tokens: list[Token]) -> Outcome:
        """Execute an already tokenized program."""
        self.tokens = tokens
        self.labels = resolve_labels(tokens)
        self.deq = deque()
        self.call_stack = []
        self.inverted = False
        self.ip = 0
        self.steps = 0

        try:
            while self.ip < len(self.tokens):
                self.step()
        except HaltSignal:
            return Outcome.EXITED
        return Outcome.FINISHED

    def step(self):
        """Execute the token at the instruction pointer."""
        token = self.tokens[self.ip]
        self.steps += 1
        if self.max_steps is not None and self.steps > self.max_steps:
            raise StepLimitExceeded(f"step limit of {self.max_steps} exceeded", token)

        decoded = self.decode(token)
        if decoded is None:
            # Label definition
            self.ip += 1
            return

        word, self.left = decoded
        self.token = token
        target = self.dispatch(word)
        self.ip = self.ip + 1 if target is None else target

        # a bare `trace` already printed the deq
        if self.debug and token.text != "trace":
            self.dump_state()

    def decode(self, token: Token) -> tuple[str, bool] | None:
        """Split a token into (word, literal left?). None for label definitions."""
        text = token.text

        if text in BARE_KEYWORDS:
            return text, False

        if len(text) < 2:
            raise DeqError("token of size less than 2 is impossible!", token)

        if not text.startswith("!") and not text.endswith("!") and not text.endswith(":"):
            raise DeqError("not a label and no direction specified!", token)

        if text.startswith("!") and text.endswith(":"):
            raise DeqError("label cannot contain direction specifier! Consider removing '!', "
                           "if it is a label.", token)

        if text.endswith(":"):
            return None
        if text.startswith("!"):
            return text[1:], True
        return text[:-1], False

    def dispatch(self, word: str) -> int | None:
        """Run one word. Returns the jump target, or None to advance."""
        first = word[0]

        if (first == "-" or first.isdigit()) and word.endswith("f"):
            try:
                value = parse_real(word[:-1])
            except ValueError:
                raise DeqError(f"invalid real literal '{word}'", self.token)
            self.push(deq_real(value, self.ip))
            return None

        if first == "-" or first.isdigit():
            try:
                value = parse_integer(word)
            except ValueError:
                raise DeqError(f"invalid integer literal '{word}'", self.token)
            self.push(deq_integer(value, self.ip))
            return None

        if len(word) >= 2 and word[0] == '"' and word[-1] == '"':
            self.push(deq_string(unescape(word[1:-1]), self.ip))
            return None

        method = self.operations.get(word)
        if method is not None:
            return getattr(self, method)()

        if word in self.labels:
            self.push(deq_integer(self.labels[word], self.ip))
            return None

        raise DeqError("unexpected token", self.token)

    # ================================================
    # Deq access
    # ================================================

    @property
    def effective_left(self) -> bool:
        return self.left != self.inverted

    def push(self, value: DeqValue, left: bool | None = None):
        if left is None:
            left = self.effective_left
        if left:
            self.deq.appendleft(value)
        else:
            self.deq.append(value)

    def pop(self, left: bool | None = None) -> DeqValue:
        if left is None:
            left = self.effective_left
        return self.deq.popleft() if left else self.deq.pop()

    def expect(self, n: int):
        if len(self.deq) < n:
            raise DeqError(f"expected to have at least {n} elements on the deq", self.token)

    def typecheck(self, values: list[DeqValue], types: list[DeqType]):
        """Fail on the first value whose type differs from the one expected."""
        for value, expected in zip(values, types):
            if value.type != expected:
                raise self.type_error(value, expected)

    def type_error(self, value: DeqValue, *expected: DeqType) -> DeqTypeError:
        wanted = " or ".join(t.human() for t in expected)
        return DeqTypeError(
            f"expected to be {wanted} but got {value.type.human()}",
            self.tokens[value.origin],
            notes=[(self.token, "for this operation")],
        )

    def jump_target(self, value: DeqValue) -> int:
        if value.value < 0:
            raise DeqError(f"jump target out of range: {value.value}", self.token)
        return value.value

    # ================================================
    # Console
    # ================================================

    def write(self, text: str):
        """Program output."""
        self.output.append(text)
        print(text, end="", file=self.stdout or sys.stdout)

    def report(self, diag: Diagnostic):
        """A non-fatal diagnostic."""
        self.diagnostics.append(diag)
        emit(diag, self.stderr)

    def trace_line(self) -> str:
        return "".join(f"{v.trace()} " for v in self.deq) + "\n"

    def dump_state(self):
        out = self.stdout or sys.stdout
        print("DEQUE STATE:", file=out)
        print(self.trace_line(), end="", file=out)
        print("CALL STACK:", file=out)
        print(" ".join(str(frame) for frame in self.call_stack), file=out)

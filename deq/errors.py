"""Fatal error types raised by the deq engine."""
from __future__ import annotations
from typing import Optional

from .tokens import Token
from .diagnostics import Diagnostic, error, note


class DeqError(Exception):
    """Fatal runtime error. Carries the token it is attributed to."""
    def __init__(self, message: str, token: Optional[Token] = None,
                 notes: list[tuple[Token, str]] | None = None):
        super().__init__(message)
        self.message = message
        self.token = token
        self.notes = notes or []

    def __str__(self):
        if self.token is None:
            return self.message
        return f"{self.token.loc}: {self.message}"

    def diagnostics(self) -> list[Diagnostic]:
        loc = self.token.loc if self.token is not None else None
        diags = [error(self.message, loc)]
        for tok, msg in self.notes:
            diags.append(note(msg, tok.loc))
        return diags


class DeqTypeError(DeqError):
    """An operand does not have the type an operation requires."""


class StepLimitExceeded(DeqError):
    """The interpreter executed more instructions than it was allowed."""

"""Console diagnostics: [ERR], [WRN] and [NOTE] lines."""
from __future__ import annotations
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TextIO

from .tokens import Location


class Severity(Enum):
    ERR = "ERR"
    WRN = "WRN"
    NOTE = "NOTE"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    loc: Optional[Location] = None

    def render(self) -> str:
        if self.loc is None:
            return f"[{self.severity.value}] {self.message}"
        return f"{self.loc}: [{self.severity.value}] {self.message}"

    def __str__(self):
        return self.render()


def error(message: str, loc: Optional[Location] = None) -> Diagnostic:
    return Diagnostic(Severity.ERR, message, loc)


def warning(message: str, loc: Optional[Location] = None) -> Diagnostic:
    return Diagnostic(Severity.WRN, message, loc)


def note(message: str, loc: Optional[Location] = None) -> Diagnostic:
    return Diagnostic(Severity.NOTE, message, loc)


def emit(diag: Diagnostic, stream: TextIO | None = None):
    """Print a diagnostic line to stderr (or the given stream)."""
    print(diag.render(), file=stream or sys.stderr)

"""Source locations and tokens for deq."""
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    filename: str
    col: int
    row: int

    def __str__(self):
        # row/col are stored zero-based, shown one-based
        return f"{self.filename}:{self.row + 1}:{self.col + 1}"


@dataclass(frozen=True)
class Token:
    loc: Location
    text: str

    def __repr__(self):
        return f"Token({self.text!r}, {self.loc})"

    @property
    def is_label(self) -> bool:
        return self.text.endswith(":")

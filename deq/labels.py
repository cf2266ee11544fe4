"""Label pre-pass: maps every `name:` token to its index."""
from __future__ import annotations
from .tokens import Token
from .errors import DeqError


class LabelError(DeqError):
    """A label is defined more than once."""


def resolve_labels(tokens: list[Token]) -> dict[str, int]:
    labels: dict[str, int] = {}
    for i, token in enumerate(tokens):
        text = token.text
        # `!name:` is invalid; dispatch reports it when it gets there
        if not token.is_label or text.startswith("!"):
            continue
        name = text[:-1]
        if name in labels:
            first = tokens[labels[name]]
            raise LabelError(f"label '{name}' is already defined!", token,
                             notes=[(first, "first defined here")])
        labels[name] = i
    return labels

"""Lexer for deq — splits source text into location-tagged tokens."""
from __future__ import annotations
from .tokens import Location, Token
from .diagnostics import Diagnostic, error


class Lexer:
    def __init__(self, source: str, filename: str = "<string>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.row = 0
        self.col = 0
        self.tokens: list[Token] = []
        # Non-fatal problems found while lexing (unclosed strings)
        self.diagnostics: list[Diagnostic] = []

    @property
    def current(self) -> str:
        if self.pos >= len(self.source):
            return "\0"
        return self.source[self.pos]

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def peek(self, offset: int = 1) -> str:
        p = self.pos + offset
        if p >= len(self.source):
            return "\0"
        return self.source[p]

    def advance(self) -> str:
        ch = self.current
        self.pos += 1
        if ch == "\n":
            self.row += 1
            self.col = 0
        else:
            self.col += 1
        return ch

    def location(self) -> Location:
        return Location(self.filename, self.col, self.row)

    def skip_comment(self):
        """Skip # to end of line (the newline itself is left in place)."""
        while not self.at_end and self.current != "\n":
            self.advance()

    def read_string(self) -> Token:
        """Read a quoted literal, keeping quotes and any ! marker in the text."""
        loc = self.location()
        start = self.pos
        if self.current == "!":
            self.advance()
        self.advance()  # opening quote
        while not self.at_end and self.current != '"':
            if self.current == "\\" and self.pos + 1 < len(self.source):
                self.advance()
            self.advance()
        if self.at_end:
            self.diagnostics.append(error("Unclosed string!", loc))
            return Token(loc, self.source[start:self.pos])
        self.advance()  # closing quote
        if self.current == "!":
            self.advance()
        return Token(loc, self.source[start:self.pos])

    def read_word(self) -> Token:
        loc = self.location()
        start = self.pos
        while not self.at_end and not self.current.isspace():
            self.advance()
        return Token(loc, self.source[start:self.pos])

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source into a list of Tokens."""
        self.tokens = []

        while not self.at_end:
            ch = self.current

            if ch.isspace():
                self.advance()
                continue

            if ch == "#":
                self.skip_comment()
                continue

            if ch == '"' or (ch == "!" and self.peek() == '"'):
                self.tokens.append(self.read_string())
                continue

            self.tokens.append(self.read_word())

        return self.tokens


def tokenize(source: str, filename: str = "<string>") -> list[Token]:
    return Lexer(source, filename).tokenize()

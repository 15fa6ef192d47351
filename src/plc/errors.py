"""Error types with formatted source context."""

from __future__ import annotations

from plc.tokens import Position, position_at


class ParseError(Exception):
    """Raised on the first lexing or parsing error, with offset and source context.

    ``offset`` is the absolute character offset in the source that caused the
    failure. ``source`` may be empty when the parser was handed tokens only, in
    which case the formatted message omits the source snippet.
    """

    def __init__(self, message: str, offset: int, source: str = "", length: int = 1) -> None:
        self.message = message
        self.offset = offset
        self.source = source
        self.length = length
        super().__init__(self.format())

    @property
    def position(self) -> Position:
        return position_at(self.source, self.offset)

    def format(self, filename: str = "input.plc") -> str:
        if not self.source:
            return f"error: {self.message}\n  --> {filename}:@{self.offset}"

        pos = self.position
        lines = self.source.split("\n")
        line_idx = pos.line - 1
        col = pos.column

        # Lines break on "\n" only, as in position_at; drop a trailing "\r"
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        # Underline the offending text, at least 1 char, at most to end of line
        underline_len = max(1, min(self.length, len(source_line) - col + 1))

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(pos.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{pos.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class LexError(ParseError):
    """Raised by the lexer on the first invalid character."""

"""
Lexer (tokenizer) for nginx-style configuration syntax.

Supports:
- Bare words (directive names and unquoted arguments)
- Quoted strings (double or single quotes, backslash escapes)
- Braces and semicolons
- Single-line (#) comments

The lexer is a small state machine fed one character at a time. Quoted
strings keep their delimiters in the token text, so `"bar"` is stored as
the five characters `"bar"`.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator


class TokenType(Enum):
    """Token types for the nginx-style config syntax."""

    # Literals
    BARE_WORD = auto()      # listen, 80, /var/www/
    QUOTED_STRING = auto()  # "quoted string" or 'quoted string'

    # Delimiters
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMICOLON = auto()      # ;

    # Special
    EOF = auto()            # end of input


class LexState(Enum):
    """States of the character-level lexing machine."""

    DEFAULT = auto()
    IN_COMMENT = auto()
    IN_BARE_WORD = auto()
    IN_QUOTED_STRING = auto()
    IN_QUOTED_ESCAPE = auto()
    AFTER_QUOTE = auto()    # just closed a quoted string


@dataclass
class Token:
    """A single token from the lexer."""

    type: TokenType
    value: str
    line: int
    column: int
    quote: str | None = None  # Delimiter of a quoted string

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    @property
    def is_word(self) -> bool:
        """True for tokens that can be statement arguments."""
        return self.type in (TokenType.BARE_WORD, TokenType.QUOTED_STRING)


class LexerError(Exception):
    """Exception raised for lexer errors."""

    def __init__(self, message: str, line: int, column: int):
        self.line = line
        self.column = column
        super().__init__(f"Line {line}, column {column}: {message}")


WHITESPACE = " \t\r\n"
QUOTES = "\"'"
PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ";": TokenType.SEMICOLON,
}
COMMENT = "#"


class Lexer:
    """
    Tokenizer for nginx-style configuration syntax.

    Example config:
        foo "bar";
        server {
            listen 80;
            root /home/ubuntu/sites/foo/;  # trailing comment
        }

    A lexer is single-use: iterate it once, create a new one per parse.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

        self.state = LexState.DEFAULT
        self.quote: str | None = None
        self._buffer: list[str] = []
        self._start_line = 1
        self._start_col = 1

    def _error(self, message: str, line: int | None = None, column: int | None = None) -> LexerError:
        return LexerError(
            message,
            self.line if line is None else line,
            self.column if column is None else column,
        )

    def _begin(self, state: LexState, char: str) -> None:
        """Start buffering a new word token at the current position."""
        self.state = state
        self._buffer = [char]
        self._start_line = self.line
        self._start_col = self.column

    def _emit(self, token_type: TokenType, quote: str | None = None) -> Token:
        """Flush the buffer into a token."""
        token = Token(
            type=token_type,
            value="".join(self._buffer),
            line=self._start_line,
            column=self._start_col,
            quote=quote,
        )
        self._buffer = []
        return token

    def _single(self, char: str) -> Token:
        return Token(PUNCTUATION[char], char, self.line, self.column)

    def _feed(self, char: str) -> list[Token]:
        """
        Run one transition of the state machine.

        Returns the tokens completed by this character (at most two: a bare
        word ended by a brace or semicolon yields the word and the brace).
        """
        state = self.state

        if state is LexState.AFTER_QUOTE:
            if char not in WHITESPACE and char not in PUNCTUATION and char != COMMENT:
                raise self._error(
                    f"Quoted token must be followed by whitespace or a terminator, got {char!r}"
                )
            self.state = LexState.DEFAULT
            state = LexState.DEFAULT

        if state is LexState.DEFAULT:
            if char in WHITESPACE:
                return []
            if char == COMMENT:
                self.state = LexState.IN_COMMENT
                return []
            if char in PUNCTUATION:
                return [self._single(char)]
            if char in QUOTES:
                self.quote = char
                self._begin(LexState.IN_QUOTED_STRING, char)
                return []
            if not char.isprintable():
                raise self._error(f"Unexpected character: {char!r}")
            self._begin(LexState.IN_BARE_WORD, char)
            return []

        if state is LexState.IN_COMMENT:
            if char == "\n":
                self.state = LexState.DEFAULT
            return []

        if state is LexState.IN_BARE_WORD:
            if char in WHITESPACE:
                self.state = LexState.DEFAULT
                return [self._emit(TokenType.BARE_WORD)]
            if char == COMMENT:
                self.state = LexState.IN_COMMENT
                return [self._emit(TokenType.BARE_WORD)]
            if char in PUNCTUATION:
                self.state = LexState.DEFAULT
                return [self._emit(TokenType.BARE_WORD), self._single(char)]
            if char in QUOTES:
                raise self._error(f"Quote character {char!r} inside unquoted token")
            if not char.isprintable():
                raise self._error(f"Unexpected character: {char!r}")
            self._buffer.append(char)
            return []

        if state is LexState.IN_QUOTED_ESCAPE:
            self._buffer.append(char)
            self.state = LexState.IN_QUOTED_STRING
            return []

        # IN_QUOTED_STRING
        if char == "\\":
            self.state = LexState.IN_QUOTED_ESCAPE
            return []
        self._buffer.append(char)
        if char == self.quote:
            quote = self.quote
            self.quote = None
            self.state = LexState.AFTER_QUOTE
            return [self._emit(TokenType.QUOTED_STRING, quote)]
        return []

    def _advance(self) -> str:
        """Advance position and return current character."""
        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def _finish(self) -> Token:
        """Check the final state and return the EOF token."""
        if self.state in (LexState.IN_QUOTED_STRING, LexState.IN_QUOTED_ESCAPE):
            raise self._error(
                "Unterminated quoted string", self._start_line, self._start_col
            )
        if self.state is LexState.IN_BARE_WORD:
            raise self._error(
                f"Unterminated token {''.join(self._buffer)!r} at end of input",
                self._start_line,
                self._start_col,
            )
        self.state = LexState.DEFAULT
        return Token(TokenType.EOF, "", self.line, self.column)

    def tokenize(self) -> Iterator[Token]:
        """Generate all tokens from the source, ending with an EOF token."""
        while self.pos < len(self.source):
            # Tokens are positioned before the character is consumed
            char = self.source[self.pos]
            tokens = self._feed(char)
            self._advance()
            yield from tokens
        yield self._finish()

    def __iter__(self) -> Iterator[Token]:
        """Allow iteration over tokens."""
        return self.tokenize()


def tokenize(source: str, filename: str = "<string>") -> list[Token]:
    """Convenience function to tokenize a source string."""
    return list(Lexer(source, filename))

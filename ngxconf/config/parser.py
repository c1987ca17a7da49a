"""
Recursive descent parser for nginx-style configuration syntax.

Consumes tokens from the lexer and builds a Config tree. Each nested
block is parsed by its own recursive call; inside a call a two-state
machine tracks whether tokens of an unfinished statement are pending.
"""

from enum import Enum, auto
from typing import Iterator

from ..const import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT
from ..logging import get_logger
from .lexer import Lexer, Token, TokenType
from .tree import Config, Statement


logger = get_logger("config.parser")


def check_max_depth(max_depth: int) -> int:
    """Validate a nesting limit, returning it unchanged."""
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise ValueError(f"max_depth must be an integer, got {max_depth!r}")
    if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        raise ValueError(
            f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}"
        )
    return max_depth


class ParseError(Exception):
    """Exception raised for parser errors."""

    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        if token:
            super().__init__(f"Line {token.line}, column {token.column}: {message}")
        else:
            super().__init__(message)


class ParseState(Enum):
    """Parser states within a single block."""

    EXPECT_STATEMENT = auto()  # start of a statement, or end of the block
    IN_STATEMENT = auto()      # at least one token of a statement seen


class ConfigParser:
    """
    Recursive descent parser for nginx-style configuration.

    Grammar:
        config      := statement*
        statement   := token+ (';' | block)
        block       := '{' statement* '}'
        token       := BARE_WORD | QUOTED_STRING

    The grammar is LL(1) over token types; the parser makes one pass and
    never backtracks.
    """

    def __init__(
        self,
        source: str,
        filename: str = "<string>",
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.lexer = Lexer(source, filename)
        self.filename = filename
        self.max_depth = check_max_depth(max_depth)
        self._tokens: Iterator[Token] = iter(self.lexer)

    def _next(self) -> Token:
        return next(self._tokens)

    def parse(self) -> Config:
        """Parse the entire configuration."""
        logger.debug(f"Parsing {self.filename} (max depth {self.max_depth})")
        try:
            return self._parse_block(depth=0, opener=None)
        except RecursionError:
            # Caller is already deep in the stack
            raise ParseError("Maximum nesting depth exceeded") from None

    def _parse_block(self, depth: int, opener: Token | None) -> Config:
        """
        Parse statements until the block's closing brace.

        Args:
            depth: Nesting level, 0 for the root
            opener: The '{' that opened this block, None at the root

        Returns:
            The parsed block
        """
        block = Config(filename=self.filename)
        state = ParseState.EXPECT_STATEMENT
        tokens: list[str] = []
        first: Token | None = None

        while True:
            token = self._next()

            if token.is_word:
                if state is ParseState.EXPECT_STATEMENT:
                    first = token
                    tokens = [token.value]
                    state = ParseState.IN_STATEMENT
                else:
                    tokens.append(token.value)

            elif token.type is TokenType.SEMICOLON:
                if state is ParseState.EXPECT_STATEMENT:
                    raise ParseError("Statement has no tokens before ';'", token)
                block.statements.append(self._statement(tokens, first))
                state = ParseState.EXPECT_STATEMENT

            elif token.type is TokenType.LBRACE:
                if state is ParseState.EXPECT_STATEMENT:
                    raise ParseError("Block must follow at least one token", token)
                if depth >= self.max_depth:
                    raise ParseError(
                        f"Maximum nesting depth of {self.max_depth} exceeded", token
                    )
                child = self._parse_block(depth + 1, token)
                block.statements.append(self._statement(tokens, first, child))
                state = ParseState.EXPECT_STATEMENT

            elif token.type is TokenType.RBRACE:
                if state is ParseState.IN_STATEMENT:
                    raise ParseError(
                        f"Statement '{tokens[0]}' missing terminator before '}}'", token
                    )
                if opener is None:
                    raise ParseError("Unexpected '}' with no open block", token)
                return block

            else:  # EOF
                if state is ParseState.IN_STATEMENT:
                    raise ParseError(
                        f"Statement '{tokens[0]}' missing terminator at end of input",
                        token,
                    )
                if opener is not None:
                    raise ParseError(
                        f"Unclosed block opened at line {opener.line}, column {opener.column}",
                        token,
                    )
                return block

    @staticmethod
    def _statement(
        tokens: list[str],
        first: Token | None,
        child_block: Config | None = None,
    ) -> Statement:
        return Statement(
            tokens=tokens,
            child_block=child_block,
            line=first.line if first else 0,
            column=first.column if first else 0,
        )


def parse_config(
    source: str,
    filename: str = "<string>",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Config:
    """
    Convenience function to parse a configuration string.

    Args:
        source: Configuration source text
        filename: Filename for error messages
        max_depth: Maximum block nesting depth

    Returns:
        Parsed Config

    Raises:
        LexerError: On malformed tokens
        ParseError: On structural errors
    """
    parser = ConfigParser(source, filename, max_depth)
    return parser.parse()

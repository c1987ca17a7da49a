"""
Configuration tree produced by the parser.

A Config owns an ordered list of Statements; a Statement owns its tokens
and, optionally, a nested Config (its child block). Token text is stored
exactly as written, quotes included.
"""

from dataclasses import dataclass, field
from typing import Iterator

from ..const import INDENT


@dataclass
class Statement:
    """
    A directive: one or more tokens followed by ';' or a child block.

    Examples:
        listen 80;        -> Statement(tokens=["listen", "80"])
        foo "bar";        -> Statement(tokens=["foo", '"bar"'])
        server { ... }    -> Statement(tokens=["server"], child_block=Config(...))
    """
    tokens: list[str]
    child_block: "Config | None" = None
    line: int = 0
    column: int = 0

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError("Statement needs at least one token")

    def __repr__(self) -> str:
        if self.child_block is None:
            return f"Statement({self.tokens})"
        return f"Statement({self.tokens}, block={len(self.child_block)})"

    @property
    def name(self) -> str:
        """First token of the statement."""
        return self.tokens[0]

    @property
    def args(self) -> list[str]:
        """Tokens after the name."""
        return self.tokens[1:]

    def to_string(self, depth: int = 0) -> str:
        """Render this statement at the given indentation depth."""
        indent = INDENT * depth
        head = indent + " ".join(self.tokens)
        if self.child_block is None:
            return f"{head};\n"
        return f"{head} {{\n{self.child_block.to_string(depth + 1)}{indent}}}\n"


@dataclass
class Config:
    """
    A block of statements. The root Config is the parse result.
    """
    statements: list[Statement] = field(default_factory=list)
    filename: str = "<string>"

    def __repr__(self) -> str:
        return f"Config({self.filename!r}, statements={len(self.statements)})"

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __str__(self) -> str:
        return self.to_string(0)

    def to_string(self, depth: int = 0) -> str:
        """
        Serialize the block to canonical text.

        Each statement goes on its own line, indented by two spaces per
        depth level. An empty Config renders as the empty string.

        Args:
            depth: Indentation level of this block's statements

        Returns:
            Canonical configuration text
        """
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
            raise ValueError(f"depth must be a non-negative integer, got {depth!r}")
        return "".join(statement.to_string(depth) for statement in self.statements)

    def get_statement(self, name: str) -> Statement | None:
        """Get first statement whose first token is name."""
        for s in self.statements:
            if s.name == name:
                return s
        return None

    def get_statements(self, name: str) -> list[Statement]:
        """Get all statements whose first token is name."""
        return [s for s in self.statements if s.name == name]

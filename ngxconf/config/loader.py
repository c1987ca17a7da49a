"""
Configuration loader: reads a file and runs the parser over it.

Only filesystem paths are accepted as a source. The file is read in full
before tokenization starts.
"""

from dataclasses import dataclass
from pathlib import Path

from ..const import DEFAULT_MAX_DEPTH
from ..logging import get_logger
from .lexer import LexerError
from .parser import ParseError, check_max_depth, parse_config
from .tree import Config


logger = get_logger("config.loader")


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


class SourceError(ConfigError):
    """The configuration source could not be read."""

    pass


@dataclass
class ParseResult:
    """
    Outcome of a parse attempt.

    Truthy on success. On failure config is None and error holds the reason;
    no partial tree is kept.
    """
    success: bool
    config: Config | None = None
    error: ConfigError | None = None

    def __bool__(self) -> bool:
        return self.success


class ConfigLoader:
    """
    Loads configuration files into Config trees.

    Usage:
        loader = ConfigLoader()
        config = loader.load_file("/etc/nginx/nginx.conf")
        # or, without exceptions
        result = loader.parse("/etc/nginx/nginx.conf")
        if result:
            print(result.config)
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = check_max_depth(max_depth)

    def read_source(self, path: str | Path) -> str:
        """
        Read a configuration file as UTF-8 text, dropping a leading BOM.

        Raises:
            SourceError: If path is not a readable file
        """
        try:
            path = Path(path)
            if not path.exists():
                raise SourceError(f"Configuration file not found: {path}")
            if not path.is_file():
                raise SourceError(f"Not a file: {path}")
            data = path.read_bytes()
        except SourceError:
            raise
        except (OSError, ValueError, TypeError) as e:
            raise SourceError(f"Cannot read configuration source {str(path)[:60]!r}: {e}") from e

        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise SourceError(f"Configuration file is not valid UTF-8: {path}: {e}") from e

    def load_file(self, path: str | Path) -> Config:
        """
        Load configuration from a file.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed Config tree

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        source = self.read_source(path)
        logger.debug(f"Read {len(source)} characters from {path}")

        try:
            config = parse_config(source, str(path), self.max_depth)
        except (LexerError, ParseError) as e:
            raise ConfigError(f"Failed to parse configuration {path}: {e}") from e

        logger.debug(f"Parsed {len(config)} top-level statements from {path}")
        return config

    def parse(self, path: str | Path) -> ParseResult:
        """
        Parse a configuration file, reporting failure instead of raising.

        Args:
            path: Path to the configuration file

        Returns:
            ParseResult, truthy when the file parsed
        """
        try:
            config = self.load_file(path)
        except ConfigError as e:
            logger.warning(str(e))
            return ParseResult(success=False, error=e)
        return ParseResult(success=True, config=config)


def load_config(path: str | Path, max_depth: int = DEFAULT_MAX_DEPTH) -> Config:
    """
    Convenience function to load configuration from a file.

    Args:
        path: Path to the configuration file
        max_depth: Maximum block nesting depth

    Returns:
        Parsed Config tree
    """
    loader = ConfigLoader(max_depth)
    return loader.load_file(path)


def parse(path: str | Path, max_depth: int = DEFAULT_MAX_DEPTH) -> ParseResult:
    """Parse a configuration file into a ParseResult."""
    return ConfigLoader(max_depth).parse(path)

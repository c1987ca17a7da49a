"""
Configuration parsing module with nginx-style syntax support.
"""

from .lexer import Lexer, LexerError, Token, TokenType
from .loader import ConfigError, ConfigLoader, ParseResult, SourceError, load_config, parse
from .parser import ConfigParser, ParseError, parse_config
from .tree import Config, Statement

__all__ = [
    "Lexer",
    "LexerError",
    "Token",
    "TokenType",
    "ConfigParser",
    "ParseError",
    "parse_config",
    "Config",
    "Statement",
    "ConfigError",
    "ConfigLoader",
    "ParseResult",
    "SourceError",
    "load_config",
    "parse",
]

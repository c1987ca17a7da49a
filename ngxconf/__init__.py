"""
ngxconf: parser and canonical formatter for nginx-style configuration files.
"""

from .const import APP_VERSION as __version__
from .config import (
    Config,
    ConfigError,
    ConfigLoader,
    ParseResult,
    Statement,
    load_config,
    parse,
    parse_config,
)

__all__ = [
    "__version__",
    "Config",
    "ConfigError",
    "ConfigLoader",
    "ParseResult",
    "Statement",
    "load_config",
    "parse",
    "parse_config",
]

"""
Application constants and metadata.
"""

# Application info
APP_NAME = "ngxconf"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Parser and canonical formatter for nginx-style configuration files"

# Serializer
INDENT = "  "

# Parser limits
DEFAULT_MAX_DEPTH = 100
MAX_DEPTH_LIMIT = 500  # Stays well under the interpreter recursion limit

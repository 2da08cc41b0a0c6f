# Shared helpers: error types and output writers used by every stage
from .errors import (
    TextnetError,
    MalformedInputError,
    ConfigError,
    TokenizerFailure,
    EntityRecognitionError,
)
from .io_utils import output_tag, safe_filename, write_json, write_table

__all__ = [
    "TextnetError",
    "MalformedInputError",
    "ConfigError",
    "TokenizerFailure",
    "EntityRecognitionError",
    "output_tag",
    "safe_filename",
    "write_json",
    "write_table",
]

__version__ = "0.1.0"

# usage: exception hierarchy shared by the ETL, NLP and network stages


class TextnetError(Exception):
    """Base class for every error raised by textnet."""


class MalformedInputError(TextnetError):
    """Raw input is not valid UTF-8 text (or not text at all)."""


class ConfigError(TextnetError, ValueError):
    """Invalid pipeline configuration or threshold."""


class TokenizerFailure(TextnetError):
    """
    The tokenizer adapter raised for one record.

    `record_index` is the failing line index, or the (part, chapter, sentence)
    key when tokenizing sentences, so callers can report exactly which text
    broke; the original exception is chained as ``__cause__``.
    """

    def __init__(self, record_index, message: str = ""):
        self.record_index = record_index
        super().__init__(message or f"tokenizer failed on record {record_index}")


class EntityRecognitionError(TextnetError):
    """An NER backend could not be loaded or failed on a text block."""

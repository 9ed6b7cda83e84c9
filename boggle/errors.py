"""Error types raised by the search core."""


class BoggleError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(BoggleError, ValueError):
    """Caller input is missing or malformed (board shape, min length, target word)."""


class NotReadyError(BoggleError, RuntimeError):
    """A query was issued before a lexicon was attached."""


class ConfigurationError(BoggleError):
    """The lexicon source is missing or cannot be parsed."""

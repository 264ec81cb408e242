"""
Exception hierarchy for regcheck.
"""


class RegCheckError(Exception):
    """Base class for all regcheck errors."""
    pass


class ConfigurationError(RegCheckError):
    """Raised when settings cannot be loaded or are invalid."""
    pass


class DocumentStoreError(RegCheckError):
    """Raised by a document store gateway when documents cannot be fetched."""
    pass


class RetrievalError(RegCheckError):
    """Raised when the retrieval stage cannot obtain candidate provisions.

    Retrieval failures are fatal to an invocation: no partial result is
    produced and the underlying store message is preserved.
    """

    def __init__(self, message: str):
        super().__init__(f"Failed to retrieve legal documents: {message}")
        self.underlying_message = message

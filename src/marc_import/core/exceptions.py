class MarcImportError(Exception):
    """Base exception for marc-import failures."""


class ConfigurationError(MarcImportError):
    """Raised at load time for malformed configuration or mapping rules."""


class RecordParseError(MarcImportError):
    """Raised when an input document does not contain a usable MARC record."""


class ConversionError(MarcImportError):
    """Raised when the batch pipeline fails."""

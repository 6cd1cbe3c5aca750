"""Exceptions raised by the dive decoders."""


class ParserError(Exception):
    """Base exception for decoder errors."""
    pass


class InvalidArgumentError(ParserError, ValueError):
    """Raised when a parser is handed an argument it cannot work with."""
    pass


class DataFormatError(ParserError):
    """Raised when the bound dump is too short or a frame is malformed."""
    pass


class UnsupportedError(ParserError):
    """Raised for a field query the device does not record."""
    pass

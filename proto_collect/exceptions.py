"""
Exceptions raised by ProtoCollect.

Lookups never raise: a missing key or path is always answered with the
caller's fallback. The exceptions below cover invalid arguments and the
explicit debugging abort of ``Collection.dd()``.
"""
from __future__ import annotations


class ProtoBaseException(Exception):
    """
    Root of every ProtoCollect exception.

    :param code: Optional numeric code for the error.
    :param exception_type: Optional short tag describing the error family.
    :param message: Human readable description.
    """
    code: int | None
    exception_type: str | None
    message: str | None

    def __init__(self, code: int | None = None, exception_type: str | None = None, message: str | None = None):
        self.code = code
        self.exception_type = exception_type
        self.message = message
        super().__init__(message or exception_type or self.__class__.__name__)

    def __str__(self):
        if self.code is not None:
            return f'[{self.code}] {self.message}'
        return self.message or self.__class__.__name__


class ProtoUserException(ProtoBaseException):
    """Errors caused by the way the library is being used."""


class ProtoValidationException(ProtoUserException):
    """Invalid argument or input shape."""


class ProtoNotSupportedException(ProtoUserException):
    """The requested operation is not available for this kind of data."""


class ProtoDumpAbortException(ProtoBaseException):
    """Raised by ``Collection.dd()`` after dumping the collection."""

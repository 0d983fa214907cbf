"""Exceptions raised by message composition."""


class MimeMessageError(Exception):
    """Base exception for message composition errors."""

    pass


class UnknownParameterError(MimeMessageError):
    """Raised when a parameter name is not part of the parameter set."""

    pass


class UnknownOptionError(MimeMessageError):
    """Raised when an option name is not part of the option set."""

    pass


class InvalidParameterError(MimeMessageError):
    """Raised when a parameter value is outside its value domain."""

    pass

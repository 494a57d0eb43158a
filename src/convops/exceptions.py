class ConvopsError(Exception):
    """
    An error the CLI reports as ``Error: <message>`` and exits with ``exit_code``.

    The engine itself never raises for unknown message ids; these errors cover
    bad configuration, unreadable session files and invalid command-line input.
    """

    message: str
    exit_code: int

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ConfigurationError(ConvopsError):
    """Rejected engine options or CONVOPS_* environment values."""


class SessionError(ConvopsError):
    """No session file could be located."""


class SessionIntegrityError(ConvopsError):
    """A session snapshot that cannot be read or decoded."""


class InvalidInputError(ConvopsError):
    """A command argument the session cannot act on, such as an unknown message id."""


class ExternalDependencyError(ConvopsError):
    """The $EDITOR used by ``convops edit`` is missing or failed."""

"""Exception hierarchy for platform configuration."""


class PlatformConfigError(Exception):
    """Base class for every error raised by this package."""


class NotValidPlatformError(PlatformConfigError):
    """The sentinel variable is missing, so this is not a platform environment."""

    def __init__(self, message: str = "No valid platform found."):
        super().__init__(message)


class DecodeError(PlatformConfigError, ValueError):
    """An encoded environment variable could not be turned into a document."""

    def __init__(self, variable: str, reason: str):
        self.variable = variable
        self.reason = reason
        super().__init__(f"Failed to decode {variable}: {reason}")


class Base64DecodeError(DecodeError):
    """Raised for malformed base64 only when strict decoding is enabled."""


class LookupMiss(PlatformConfigError, LookupError):
    """Something asked for by name does not exist. Callers are expected to catch this."""


class CredentialsNotFoundError(LookupMiss):
    pass


class FormatterNotFoundError(LookupMiss):
    pass


class RouteNotFoundError(LookupMiss):
    pass

"""Error taxonomy shared by both services.

Every failure a store or client can report is a ``ServiceError``
subclass carrying the HTTP status the facade answers with. The message
is what the client sees.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidInput(ServiceError):
    status_code = 400


class Conflict(ServiceError):
    status_code = 409


class NotFound(ServiceError):
    status_code = 404


class UpstreamUnavailable(ServiceError):
    status_code = 500


class InternalLookupFailure(ServiceError):
    status_code = 500


class ConfigError(Exception):
    """Startup configuration could not be loaded."""

"""
Error taxonomy for the decision engine.

Both errors carry a user-facing message; the API layer returns it verbatim.
"""


class FortressError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FortressError):
    """Malformed or out-of-range input, rejected before any computation."""
    status_code = 400


class DataUnavailable(FortressError):
    """The record store could not be read. Not retried here."""
    status_code = 503


class AdvisorUnavailable(FortressError):
    """No text-completion backend is configured."""
    status_code = 503


class AdvisorFailed(FortressError):
    status_code = 502

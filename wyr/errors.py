"""
Error kinds raised by the poll core.

Every error carries an HTTP status and a generic, client-safe message.
Driver error text never ends up in ``message``.
"""


class WyrError(Exception):
    status_code = 500
    message = "Internal server error."

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ── Input ──
class InvalidInput(WyrError):
    status_code = 400
    message = "Invalid input"


class InvalidId(InvalidInput):
    message = "Invalid Question ID (must be positive number)."


class InvalidOption(InvalidInput):
    message = "Invalid vote option (must be A or B)."


class InvalidOptionText(InvalidInput):
    message = "Options required."


class DuplicateOptions(WyrError):
    status_code = 400
    message = "Options are identical."


# ── Lookup ──
class NotFound(WyrError):
    status_code = 404
    message = "Question not found."


# ── Storage ──
class StorageUnavailable(WyrError):
    status_code = 503
    message = "Database unavailable."


class StorageFailure(WyrError):
    status_code = 500
    message = "Database operation failed."

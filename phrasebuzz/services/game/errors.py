class ActionError(Exception):
    """A refused action: carries the message and HTTP-style status for the caller."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UploadError(Exception):
    """The winner photo could not be stored."""

"""
Domain error taxonomy shared by stores, services and controllers
"""


class ClinicDeskError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicDeskError):
    """A required field is missing or empty, or a value is not allowed"""

    status_code = 400


class DuplicateError(ClinicDeskError):
    """An aggregate with the same id already exists"""

    status_code = 409


class NotFoundError(ClinicDeskError):
    """The referenced aggregate does not exist"""

    status_code = 404


class StoreUnavailable(ClinicDeskError):
    """The backing medium could not be reached or rejected the write"""

    status_code = 503


class NoteGenerationError(ClinicDeskError):
    """The language model failed to produce a note"""

    status_code = 502

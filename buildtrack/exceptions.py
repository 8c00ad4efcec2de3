"""Error taxonomy for the project store and its callers"""


class BuildTrackError(Exception):
    """Base exception for buildtrack errors"""
    pass


class ConflictError(BuildTrackError):
    """A unique identifier is already taken"""
    pass


class UnauthorizedError(BuildTrackError):
    """Credentials did not match any account"""
    pass


class AccessDeniedError(BuildTrackError):
    """The identity is not allowed to perform the operation"""
    pass


class NotFoundError(BuildTrackError):
    """No record exists for the requested id"""

    def __init__(self, message: str, record_id: str = ""):
        super().__init__(message)
        self.record_id = record_id


class PersistenceError(BuildTrackError):
    """The underlying store is unavailable or rejected a write"""
    pass


class ProjectValidationError(BuildTrackError):
    """A project record failed validation at the store boundary"""
    pass


class RegistrationValidationError(BuildTrackError):
    """Registration input does not meet requirements"""
    pass


class MediaIngestionError(BuildTrackError):
    """Base exception for media ingestion errors"""
    pass


class InvalidMediaTypeError(MediaIngestionError):
    """Invalid media file type"""
    pass


class MediaTooLargeError(MediaIngestionError):
    """Media file too large"""
    pass

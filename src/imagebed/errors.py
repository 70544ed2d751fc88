"""Upload error taxonomy.

Every error carries the HTTP status it maps to and the message returned to
the caller in the ``error`` field of the JSON body.
"""


class UploadError(Exception):
    """Base class for every failure of the upload path."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientError(UploadError):
    """The payload itself is unacceptable."""

    status_code = 400


class ImageTooLargeError(ClientError):
    pass


class NotAnImageError(ClientError):
    pass


class InvalidFilenameError(ClientError):
    pass


class ExtractionError(UploadError):
    """The ``file`` form field is missing or the multipart body is malformed.

    Reported as 500, matching the behaviour the service has always had.
    """


class UploadIOError(UploadError):
    """Opening, reading or persisting the uploaded stream failed."""

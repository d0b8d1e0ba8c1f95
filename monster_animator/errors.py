"""
Exceptions raised by the animator and the mapping from errors to the
messages shown to the user.
"""


INVALID_KEY_MARKER = "Requested entity was not found."
INVALID_KEY_MESSAGE = "The selected API key appears to be invalid. Please select another key."


class AnimatorError(RuntimeError):
    """Base class for errors raised by this package."""


class KeyNotSelectedError(AnimatorError):
    """No API key has been selected yet in the studio environment."""

    def __init__(self, message: str = "API key not yet selected.") -> None:
        super().__init__(message)


class KeyServerError(AnimatorError):
    def __init__(
        self,
        message: str = "Could not connect to the server to get the API key. Please check the server logs.",
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MissingKeyError(AnimatorError):
    def __init__(self, message: str = "Server responded but did not provide an API key.") -> None:
        super().__init__(message)


class NotInitializedError(AnimatorError):
    def __init__(
        self,
        message: str = "Application is not initialized. Please select an API key if prompted.",
    ) -> None:
        super().__init__(message)


class VideoGenerationError(AnimatorError):
    pass


class VideoDownloadError(AnimatorError):
    def __init__(self, reason: str, details: str) -> None:
        super().__init__(
            f"Failed to download the generated video. Status: {reason}. Details: {details}"
        )
        self.reason = reason
        self.details = details


class InvalidImageError(AnimatorError):
    pass


def is_invalid_key_error(exc: BaseException) -> bool:
    return INVALID_KEY_MARKER in str(exc)


def user_message(exc: BaseException) -> str:
    """
    Turn an exception into the human-readable string shown to the user.
    An invalid credential gets its own message so the user knows to pick another key.
    """
    if is_invalid_key_error(exc):
        return INVALID_KEY_MESSAGE
    text = str(exc).strip()
    return text or "An unknown error occurred."

"""
Error taxonomy shared by the use cases and adapters.

Every error carries the message shown to the user and whether a retry
makes sense. Nothing here is retried automatically.
"""

SCRIPT_FAILED_MESSAGE = "Failed to generate ad script. The model may have returned an invalid response."
VIDEO_FAILED_MESSAGE = "Failed to generate video ad. An unexpected error occurred."


class AdStudioError(Exception):
    """Base class for all ad studio errors"""

    default_message = "An unknown error occurred. Please check the console."
    retryable = True

    def __init__(self, message: str = None):
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


class ConfigurationError(AdStudioError):
    """Required configuration is missing; fatal at startup"""

    default_message = "API_KEY environment variable not set"
    retryable = False


class RateLimitedError(AdStudioError):
    """Provider throttled the script request (HTTP 429)"""

    default_message = "API rate limit exceeded. Please try again later."


class QuotaExceededError(AdStudioError):
    """Provider throttled the video request (429 / RESOURCE_EXHAUSTED)"""

    default_message = "API quota exceeded. Please check your plan and billing details, or try again later."


class MissingResultError(AdStudioError):
    """Provider finished but the response lacks the expected result"""

    default_message = "Video generation completed, but no download link was found."


class GenerationFailedError(AdStudioError):
    """Catch-all generation failure"""

    default_message = SCRIPT_FAILED_MESSAGE


class VideoTimeoutError(GenerationFailedError):
    """Video operation did not finish within the configured maximum wait"""

    default_message = "Video generation timed out. Please try again later."


class VideoNotFoundError(AdStudioError):
    """Generated video is no longer available for download"""

    default_message = "Video not found or has expired"
    retryable = False

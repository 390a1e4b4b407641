"""
Purpose:
- Failure types raised by the prompt flows; the API layer maps them to {ok: false, error} JSON.
"""

class FlowError(Exception):
    """Base class for prompt-flow failures."""
    status_code = 500

class InvalidPhotoError(FlowError):
    """photoDataUri decoded, but it is not an image we can send (too big, corrupt, not an image)."""
    status_code = 422

class ModelServiceError(FlowError):
    """The hosted model could not be reached, refused the call, or returned unusable output."""
    status_code = 502

"""Classification of provider SDK exceptions."""

def _status_code(error: Exception):
    # google.genai.errors.APIError exposes the HTTP status as `code`
    return getattr(error, "code", None)

def is_rate_limited(error: Exception) -> bool:
    """True when the provider signalled HTTP 429"""
    return _status_code(error) == 429 or "429" in str(error)

def is_resource_exhausted(error: Exception) -> bool:
    """True for 429 or a RESOURCE_EXHAUSTED status"""
    if is_rate_limited(error):
        return True
    return getattr(error, "status", None) == "RESOURCE_EXHAUSTED" or "RESOURCE_EXHAUSTED" in str(error)

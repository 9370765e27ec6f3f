class LaundryError(Exception):
    """User-facing failure; ``message`` is shown as-is in a notification."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def error_message(exc: Exception) -> str:
    """Best human-readable text for an exception from Supabase or our own code."""
    message = getattr(exc, "message", None)
    if message:
        return str(message)
    details = getattr(exc, "details", None)
    if details:
        return str(details)
    return str(exc) or exc.__class__.__name__

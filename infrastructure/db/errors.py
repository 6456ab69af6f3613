"""
Helpers for turning Supabase client failures into store errors.
"""


def store_message(exc: BaseException) -> str:
    """
    Extract a human-readable message from a client exception.

    postgrest's APIError carries ``message``; everything else falls back to
    ``str(exc)`` and finally the exception class name.
    """
    message = getattr(exc, "message", None)
    if message:
        return str(message)
    return str(exc) or exc.__class__.__name__

from .sanitize import sanitize_error

__all__ = ["sanitize_error"]

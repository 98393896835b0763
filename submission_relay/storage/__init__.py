from .base import AuditBackend
from .factory import get_storage_backend, reset_storage_backend

__all__ = ["AuditBackend", "get_storage_backend", "reset_storage_backend"]

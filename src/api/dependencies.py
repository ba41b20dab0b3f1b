"""FastAPI dependencies for injection."""
from core.auth import authenticate_request, get_current_identity, require_admin
from core.cache import get_response_cache
from core.config import get_settings
from core.identifiers import get_identifier_validator
from db.session import get_async_session

__all__ = [
    "authenticate_request",
    "get_async_session",
    "get_current_identity",
    "get_identifier_validator",
    "get_response_cache",
    "get_settings",
    "require_admin",
]

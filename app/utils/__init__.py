"""Shared utilities for the translation backend."""

from app.utils.auth import (
    verify_token,
    get_bearer_token,
    token_required,
)

__all__ = [
    'verify_token',
    'get_bearer_token',
    'token_required',
]

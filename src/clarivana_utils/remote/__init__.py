"""HTTP helpers for remote ingredient data."""

from .fetch import fetch_json
from .retry import RETRY_STATUS_CODES, is_transient, retry_transient_errors

__all__ = ["RETRY_STATUS_CODES", "fetch_json", "is_transient", "retry_transient_errors"]

"""
Error handling utilities for the dashboard assistant.

This module provides:
1. The exceptions a remote command service failure is reported with
2. Tracking of remote failures that were answered by the local interpreter
3. User-friendly error messages for the chat transcript
"""
from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, List, Optional

FALLBACK_REASONS = ("quota", "transport", "status", "parse")


class RemoteCommandError(Exception):
    """A remote command call failed in a way the local interpreter can cover."""
    reason = "transport"

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class RemoteQuotaError(RemoteCommandError):
    """Quota exhausted or rate limited."""
    reason = "quota"


class RemoteTransportError(RemoteCommandError):
    """Network failure or timeout before a response arrived."""
    reason = "transport"


class RemoteStatusError(RemoteCommandError):
    """Non-success response that is not a quota signal (auth, bad request, server error)."""
    reason = "status"


class RemoteParseError(RemoteCommandError):
    """The response body did not match the command contract."""
    reason = "parse"


class ErrorHandler:
    def __init__(self, max_recent: int = 100):
        self.max_recent = max_recent
        self.error_stats = defaultdict(int)
        self.recent_errors: List[Dict[str, Any]] = []

    def track_fallback(self, error: RemoteCommandError, query: str) -> None:
        """Record a remote failure that was answered locally."""
        self._track_error(error.reason, query, error.message)

    def _track_error(self, error_type: str, query: str, details: str = ""):
        """Track error information"""
        error_info = {
            'error_type': error_type,
            'query': query,
            'details': details,
            'timestamp': datetime.now().isoformat()
        }
        self.error_stats[error_type] += 1
        self.recent_errors.append(error_info)
        # Only keep the latest records
        if len(self.recent_errors) > self.max_recent:
            self.recent_errors.pop(0)

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics"""
        return {
            'total_fallbacks': sum(self.error_stats.values()),
            'fallback_reasons': {reason: self.error_stats.get(reason, 0) for reason in FALLBACK_REASONS},
            'recent_errors': self.recent_errors[-10:]
        }

    def get_user_friendly_error(self, error: BaseException) -> str:
        """Generate the transcript text for an unexpected error."""
        detail = str(error).strip() or type(error).__name__
        return f"Error: {detail}"

"""
Custom Exception Hierarchy - Domain-specific error types

All custom exceptions inherit from ConsensusError for easy catching.

The analysis kernel degrades silently on bad input, so these errors only
escape through the strict decoding path that hosts opt into.
"""

from typing import Optional, Dict, Any


class ConsensusError(Exception):
    """Base exception for all consensus kernel errors

    Carries a context dict that is rendered into the message, so log lines
    and CLI output show the offending detail without extra plumbing.
    """

    # Input problems never fix themselves on retry
    _retryable: bool = False

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.context = context or {}
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        """Check if this error represents a transient failure that should be retried."""
        return self._retryable

    def __str__(self):
        base_msg = super().__str__()
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_msg} (context: {context_str})"
        return base_msg


class VotePayloadError(ConsensusError):
    """Vote payload could not be decoded as an array of records

    Examples:
    - Bytes that are not valid UTF-8
    - Text that is not JSON
    - JSON whose top level is not an array
    """

    def __init__(self, message: str, reason: str, original_error: Optional[Exception] = None):
        self.reason = reason
        self.original_error = original_error

        context = {"reason": reason}
        if original_error:
            context["original_error"] = str(original_error)

        super().__init__(message, context)

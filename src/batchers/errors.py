"""
Exceptions and retry policy for batched eth_call execution.

Only transient failures (transport, rate limiting, anything unrecognised)
are worth another attempt. A revert or undecodable result at a fixed block
will fail the same way again.
"""

from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class BatchError(Exception):
    """Base exception for batch operations."""
    pass


class RateLimitError(BatchError):
    """The RPC provider throttled the request."""

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class NetworkError(BatchError):
    """The RPC endpoint could not be reached."""
    pass


class ContractError(BatchError):
    """A call reverted, or a strict batch contained a failed call."""
    pass


class DecodeError(BatchError):
    """Return data did not match the expected ABI type."""
    pass


class ValidationError(BatchError):
    """A call was rejected before being sent."""
    pass


# Checked in order against the lower-cased message of foreign exceptions
_KEYWORDS = (
    ('rate_limit', ('rate limit', 'too many requests', '429')),
    ('contract', ('revert', 'out of gas')),
    ('network', ('connection', 'timeout', 'network', 'dns')),
    ('validation', ('invalid', 'bad request', '400')),
)

_RETRYABLE = ('network', 'rate_limit', 'unknown')

MAX_BACKOFF = 60


class ErrorHandler:
    """Classifies batch failures and decides whether and when to retry."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def classify_error(self, error: Exception) -> str:
        """
        Map an exception to rate_limit, contract, validation, network or unknown.

        Our own exception types classify by type. Anything else raised by
        web3 or the transport is classified from its message.
        """
        if isinstance(error, RateLimitError):
            return 'rate_limit'
        if isinstance(error, (ContractError, DecodeError)):
            return 'contract'
        if isinstance(error, ValidationError):
            return 'validation'
        if isinstance(error, NetworkError):
            return 'network'

        message = str(error).lower()
        for category, keywords in _KEYWORDS:
            if any(keyword in message for keyword in keywords):
                return category
        return 'unknown'

    def should_retry(self, error: Exception, attempt: int, max_retries: int) -> bool:
        """
        Args:
            error: Failure of the attempt just made
            attempt: 0-based index of that attempt
            max_retries: Total attempts allowed
        """
        if attempt + 1 >= max_retries:
            return False
        return self.classify_error(error) in _RETRYABLE

    def get_retry_delay(self, error: Exception, attempt: int) -> float:
        """Exponential backoff in seconds, doubled for throttling."""
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return error.retry_after

        delay = min(2 ** attempt, MAX_BACKOFF)
        category = self.classify_error(error)
        if category == 'rate_limit':
            return delay * 2
        if category == 'network':
            return delay
        return delay * 1.5

    def log_error(self, error: Exception, context: Dict[str, Any]):
        category = self.classify_error(error)
        extra = {
            'error_type': type(error).__name__,
            'error_category': category,
            'error_message': str(error),
            **context
        }

        if category == 'contract':
            self.logger.error(f"Batch call failed: {error}", extra=extra)
        elif category == 'rate_limit':
            self.logger.info(f"Rate limited: {error}", extra=extra)
        else:
            self.logger.warning(f"Batch call error ({category}): {error}", extra=extra)

"""
Error handling utilities for batched read operations.

This module provides the exception hierarchy raised by the multicall layer
and a small helper that classifies provider failures and logs them.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from web3.exceptions import ContractLogicError

logger = logging.getLogger(__name__)


class BatchError(Exception):
    """Base exception for batch operations."""
    pass


class RateLimitError(BatchError):
    """Raised when rate limit is hit."""

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class NetworkError(BatchError):
    """Raised when network-related errors occur."""
    pass


class ContractError(BatchError):
    """Raised when contract-related errors occur."""
    pass


class ValidationError(BatchError):
    """Raised when input validation fails."""
    pass


_ERROR_TYPES = {
    "rate_limit": RateLimitError,
    "network": NetworkError,
    "contract": ContractError,
    "validation": ValidationError,
}


class ErrorHandler:
    """
    Centralized error handling for batch operations.

    Classifies provider failures so they can be raised as the matching
    BatchError subclass and logged at an appropriate level.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def classify_error(self, error: Exception) -> str:
        """
        Classify an error into a category for appropriate handling.

        Args:
            error: Exception to classify

        Returns:
            Error category string
        """
        if isinstance(error, BatchError):
            for category, error_type in _ERROR_TYPES.items():
                if isinstance(error, error_type):
                    return category
            return 'unknown'

        if isinstance(error, ContractLogicError):
            return 'contract'

        if isinstance(error, (asyncio.TimeoutError, TimeoutError, ConnectionError)):
            return 'network'

        error_str = str(error).lower()

        # Rate limiting errors
        if any(keyword in error_str for keyword in ['rate limit', 'too many requests', '429']):
            return 'rate_limit'

        # Network connectivity errors
        if any(keyword in error_str for keyword in ['connection', 'timeout', 'network', 'dns']):
            return 'network'

        # Contract execution errors
        if any(keyword in error_str for keyword in ['revert', 'execution reverted', 'out of gas']):
            return 'contract'

        # Validation errors
        if any(keyword in error_str for keyword in ['invalid', 'bad request', '400']):
            return 'validation'

        return 'unknown'

    def to_batch_error(self, error: Exception, message: str) -> BatchError:
        """
        Wrap a provider exception into the BatchError subclass for its category.

        Args:
            error: Original exception
            message: Context prefix for the new exception message

        Returns:
            BatchError instance; the caller raises it from the original
        """
        if isinstance(error, BatchError):
            return error

        error_type = _ERROR_TYPES.get(self.classify_error(error), BatchError)
        return error_type(f"{message}: {error}")

    def log_error(self, error: Exception, context: Dict[str, Any]):
        """
        Log error with appropriate level and context.

        Args:
            error: Exception to log
            context: Additional context for logging
        """
        error_category = self.classify_error(error)

        log_data = {
            'error_type': type(error).__name__,
            'error_category': error_category,
            'error_message': str(error),
            **context
        }

        # Log validation errors as warnings
        if error_category == 'validation':
            self.logger.warning("Validation error occurred", extra=log_data)
        # Log contract errors as errors
        elif error_category == 'contract':
            self.logger.error("Contract execution failed", extra=log_data)
        # Log rate limit as info (expected)
        elif error_category == 'rate_limit':
            self.logger.info("Rate limit encountered", extra=log_data)
        # Everything else as warning
        else:
            self.logger.warning("Batch operation error", extra=log_data)

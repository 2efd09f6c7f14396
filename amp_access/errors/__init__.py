"""
Error types and error codes for the access adapter.

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.
"""

from enum import Enum
from typing import Dict, Any, Optional


class ErrorCode(str, Enum):
    """Error codes surfaced by the access adapter."""
    CONFIGURATION_ERROR = "configuration_error"
    TIMEOUT = "timeout"
    TRANSPORT_ERROR = "transport_error"
    PARSE_ERROR = "parse_error"
    INTERNAL_ERROR = "internal_error"

    def __str__(self) -> str:
        return self.value


class AccessError(Exception):
    """Base exception for all access adapter errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            'error': self.error_code.value,
            'message': self.message,
            'details': self.details
        }

        if self.cause:
            result['cause'] = str(self.cause)

        return result

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ConfigError(AccessError):
    """Raised when a required configuration field is missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR)
        self.field = field
        self.value = value

        if field:
            self.details['field'] = field
        if value is not None:
            self.details['value'] = str(value)


class AccessTimeoutError(AccessError, TimeoutError):
    """Raised when the authorization request exceeds its deadline."""

    def __init__(self, message: str, timeout_ms: Optional[float] = None):
        super().__init__(message, ErrorCode.TIMEOUT)
        self.timeout_ms = timeout_ms

        if timeout_ms is not None:
            self.details['timeout_ms'] = timeout_ms


class TransportError(AccessError):
    """Raised when the document fetch fails at the network or HTTP level."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message, ErrorCode.TRANSPORT_ERROR, cause=cause)
        self.url = url
        self.status = status

        if url:
            self.details['url'] = url
        if status is not None:
            self.details['status'] = status


class ParseError(AccessError):
    """Raised when the response lacks valid authorization data."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.PARSE_ERROR, cause=cause)


__all__ = [
    'ErrorCode',
    'AccessError',
    'ConfigError',
    'AccessTimeoutError',
    'TransportError',
    'ParseError',
]

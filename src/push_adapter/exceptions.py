"""Push adapter exception hierarchy.

Every error raised by the adapter derives from PushAdapterError and
carries an ErrorCode, so callers can catch the whole family at once.
"""

from typing import Optional

from src.push_adapter.config import ErrorCode


class PushAdapterError(Exception):
    """Base exception for all push adapter errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.DELIVERY_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ConfigurationError(PushAdapterError):
    """Raised when no usable tenant credentials are configured."""

    def __init__(self, message: str = "No valid OneSignal credentials configured"):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR)


class UnknownTenantError(PushAdapterError):
    """Raised when a payload targets a tenant that is not registered."""

    def __init__(self, tenant: str):
        super().__init__(f"Unknown OneSignal project: {tenant}", ErrorCode.UNKNOWN_TENANT)
        self.tenant = tenant


class TransportError(PushAdapterError):
    """Raised by a transport when the upstream cannot be reached."""

    def __init__(self, message: str = "Error connecting to OneSignal"):
        super().__init__(message, ErrorCode.TRANSPORT_ERROR)


class DeliveryError(PushAdapterError):
    """Raised when a batch for a platform is rejected or cannot be sent."""

    def __init__(
        self,
        platform: str,
        message: str = "OneSignal Error",
        status_code: Optional[int] = None,
        batch_index: Optional[int] = None,
    ):
        super().__init__(message, ErrorCode.DELIVERY_ERROR)
        self.platform = platform
        self.status_code = status_code
        self.batch_index = batch_index
        self.failed_platforms: list[str] = [platform]

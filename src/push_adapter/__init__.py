"""OneSignal Push Adapter.

Push notification dispatch through the OneSignal REST API:
- Multi-tenant credential routing
- Installation classification by platform (iOS, Android)
- Per-platform payload translation
- Chunked sequential delivery with fail-fast errors
"""

from src.push_adapter.config import (
    BadgeType,
    ErrorCode,
    Platform,
    PushAdapterConfig,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_PUSH_ADAPTER_CONFIG,
    DEFAULT_TENANT,
)
from src.push_adapter.exceptions import (
    ConfigurationError,
    DeliveryError,
    PushAdapterError,
    TransportError,
    UnknownTenantError,
)
from src.push_adapter.models import (
    DispatchResult,
    Installation,
    NotificationPayload,
    PlatformBody,
    PlatformResult,
    TenantConfig,
    TransportResponse,
)
from src.push_adapter.credentials import CredentialRegistry
from src.push_adapter.devices import classify_installations
from src.push_adapter.translator import TRANSLATORS, translate_android, translate_ios
from src.push_adapter.transport import HttpxTransport, Transport
from src.push_adapter.dispatcher import BatchDispatcher
from src.push_adapter.adapter import PushAdapter

__all__ = [
    # Config
    "BadgeType",
    "ErrorCode",
    "Platform",
    "PushAdapterConfig",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_PUSH_ADAPTER_CONFIG",
    "DEFAULT_TENANT",
    # Exceptions
    "ConfigurationError",
    "DeliveryError",
    "PushAdapterError",
    "TransportError",
    "UnknownTenantError",
    # Models
    "DispatchResult",
    "Installation",
    "NotificationPayload",
    "PlatformBody",
    "PlatformResult",
    "TenantConfig",
    "TransportResponse",
    # Components
    "CredentialRegistry",
    "classify_installations",
    "TRANSLATORS",
    "translate_android",
    "translate_ios",
    "HttpxTransport",
    "Transport",
    "BatchDispatcher",
    "PushAdapter",
]

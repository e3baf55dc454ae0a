"""Configuration for the OneSignal push adapter."""

from dataclasses import dataclass
from enum import Enum


class Platform(Enum):
    """Platforms the adapter can deliver to."""
    IOS = "ios"
    ANDROID = "android"


class BadgeType(Enum):
    """OneSignal iOS badge operations."""
    INCREASE = "Increase"
    SET_TO = "SetTo"


class ErrorCode(Enum):
    """Error codes attached to adapter exceptions."""
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UNKNOWN_TENANT = "UNKNOWN_TENANT"
    DELIVERY_ERROR = "DELIVERY_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


# Tenant used when a payload names none
DEFAULT_TENANT = "default"

# OneSignal accepts at most 2000 devices per notification request
DEFAULT_CHUNK_SIZE = 2000

ONESIGNAL_HOST = "onesignal.com"
ONESIGNAL_PORT = 443
ONESIGNAL_NOTIFICATIONS_PATH = "/api/v1/notifications"

# Device token list field per platform
TOKEN_FIELDS: dict[Platform, str] = {
    Platform.IOS: "include_ios_tokens",
    Platform.ANDROID: "include_android_reg_ids",
}

# Credential keys accepted in push configs: (app id key, api key key)
CREDENTIAL_KEYS: list[tuple[str, str]] = [
    ("oneSignalAppId", "oneSignalApiKey"),
    ("app_id", "api_key"),
]

ENV_APP_ID = "ONESIGNAL_APP_ID"
ENV_API_KEY = "ONESIGNAL_API_KEY"


@dataclass
class PushAdapterConfig:
    """Push adapter delivery configuration."""

    # Batching
    chunk_size: int = DEFAULT_CHUNK_SIZE

    # Upstream endpoint
    host: str = ONESIGNAL_HOST
    port: int = ONESIGNAL_PORT
    path: str = ONESIGNAL_NOTIFICATIONS_PATH
    request_timeout: float = 30.0

    # Installation platforms that are classified and sent to
    valid_push_types: tuple[str, ...] = (Platform.IOS.value, Platform.ANDROID.value)


DEFAULT_PUSH_ADAPTER_CONFIG = PushAdapterConfig()

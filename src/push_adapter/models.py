"""Data models for the push adapter."""

import copy
from dataclasses import dataclass, field
from typing import Any, Optional

from src.push_adapter.config import Platform


@dataclass(frozen=True)
class TenantConfig:
    """OneSignal credentials for one tenant."""

    name: str
    app_id: str
    api_key: str

    def __repr__(self) -> str:
        # Keep the api key out of logs and tracebacks
        return f"TenantConfig(name={self.name!r}, app_id={self.app_id!r})"


@dataclass(frozen=True)
class Installation:
    """A device installation supplied by the caller."""

    device_token: str
    platform: str

    @classmethod
    def from_dict(cls, data: dict) -> "Installation":
        """Build from a Parse-style or snake_case installation record."""
        return cls(
            device_token=data.get("deviceToken", data.get("device_token", "")),
            platform=data.get("deviceType", data.get("platform", "")),
        )


@dataclass
class NotificationPayload:
    """Platform-agnostic notification payload."""

    data: dict[str, Any] = field(default_factory=dict)
    target_tenant: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: dict) -> "NotificationPayload":
        tenant = (
            payload.get("targetTenant")
            or payload.get("target_tenant")
            or payload.get("_pushTo")
        )
        return cls(data=payload.get("data") or {}, target_tenant=tenant)


@dataclass
class PlatformBody:
    """Translated OneSignal request body for one platform.

    Holds everything except the app id and the device tokens, which
    are filled in per chunk by to_request().
    """

    platform: Platform
    token_field: str
    fields: dict[str, Any] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)

    def to_request(self, app_id: str, tokens: list[str]) -> dict[str, Any]:
        """Build a standalone wire body for one chunk of device tokens."""
        request = copy.deepcopy(self.fields)
        request["data"] = copy.deepcopy(self.data)
        request[self.token_field] = list(tokens)
        request["app_id"] = app_id
        return request


@dataclass
class TransportResponse:
    """Status and raw body returned by a transport."""

    status_code: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code < 299


@dataclass
class PlatformResult:
    """Outcome of a successful platform dispatch."""

    platform: Platform
    devices: int = 0
    batches: int = 0

    def to_dict(self) -> dict:
        return {
            "platform": self.platform.value,
            "devices": self.devices,
            "batches": self.batches,
        }


@dataclass
class DispatchResult:
    """Aggregate outcome of a successful send() call."""

    tenant: str
    platforms: list[PlatformResult] = field(default_factory=list)

    @property
    def total_devices(self) -> int:
        return sum(p.devices for p in self.platforms)

    @property
    def total_batches(self) -> int:
        return sum(p.batches for p in self.platforms)

    def to_dict(self) -> dict:
        return {
            "tenant": self.tenant,
            "platforms": [p.to_dict() for p in self.platforms],
            "total_devices": self.total_devices,
            "total_batches": self.total_batches,
        }

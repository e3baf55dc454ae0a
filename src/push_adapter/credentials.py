"""Tenant credential registry.

A push config is either a single flat credential mapping, registered
under the default tenant, or a mapping of tenant name to credential
mapping. Tenants missing an app id or api key are skipped.
"""

import logging
import os
from types import MappingProxyType
from typing import Mapping, Optional

from src.push_adapter.config import (
    CREDENTIAL_KEYS,
    DEFAULT_TENANT,
    ENV_API_KEY,
    ENV_APP_ID,
)
from src.push_adapter.exceptions import ConfigurationError, UnknownTenantError
from src.push_adapter.models import TenantConfig

logger = logging.getLogger(__name__)


def _extract_credentials(entry) -> Optional[tuple[str, str]]:
    """Return (app_id, api_key) from a credential mapping, if complete."""
    if not isinstance(entry, Mapping):
        return None
    for app_id_key, api_key_key in CREDENTIAL_KEYS:
        app_id = entry.get(app_id_key)
        api_key = entry.get(api_key_key)
        if app_id and api_key:
            return str(app_id), str(api_key)
    return None


class CredentialRegistry:
    """Resolves tenant names to OneSignal credentials.

    Example:
        registry = CredentialRegistry({"oneSignalAppId": "...", "oneSignalApiKey": "..."})
        tenant = registry.resolve()  # the "default" tenant
    """

    def __init__(self, push_config: Optional[Mapping] = None):
        push_config = push_config or {}
        tenants: dict[str, TenantConfig] = {}

        flat = _extract_credentials(push_config)
        if flat:
            tenants[DEFAULT_TENANT] = TenantConfig(DEFAULT_TENANT, *flat)
        else:
            for name, entry in push_config.items():
                creds = _extract_credentials(entry)
                if not creds:
                    logger.warning(f"Skipping OneSignal tenant {name!r}: missing app id or api key")
                    continue
                tenants[str(name)] = TenantConfig(str(name), *creds)

        if not tenants:
            raise ConfigurationError(
                "Trying to initialize OneSignal push adapter without oneSignalAppId or oneSignalApiKey"
            )

        self._tenants = MappingProxyType(tenants)
        logger.info(f"Registered OneSignal tenants: {', '.join(self.tenants)}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CredentialRegistry":
        """Build a default-tenant registry from ONESIGNAL_* env vars."""
        environ = os.environ if environ is None else environ
        return cls({
            "app_id": environ.get(ENV_APP_ID, ""),
            "api_key": environ.get(ENV_API_KEY, ""),
        })

    @property
    def tenants(self) -> list[str]:
        return sorted(self._tenants)

    def resolve(self, tenant_name: Optional[str] = None) -> TenantConfig:
        """Look up a tenant, falling back to the default tenant name."""
        name = tenant_name or DEFAULT_TENANT
        tenant = self._tenants.get(name)
        if tenant is None:
            raise UnknownTenantError(name)
        return tenant

    def __contains__(self, tenant_name: object) -> bool:
        return tenant_name in self._tenants

    def __len__(self) -> int:
        return len(self._tenants)

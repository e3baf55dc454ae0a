"""OneSignal push adapter.

Entry point for hosts: classifies installations by platform,
translates the payload per platform and delivers each platform
concurrently through the batch dispatcher.
"""

import asyncio
import logging
from typing import Iterable, Mapping, Optional, Union

from src.logging_config.context import DispatchContext, bind_platform
from src.push_adapter.config import (
    DEFAULT_PUSH_ADAPTER_CONFIG,
    Platform,
    PushAdapterConfig,
)
from src.push_adapter.credentials import CredentialRegistry
from src.push_adapter.devices import classify_installations
from src.push_adapter.dispatcher import BatchDispatcher
from src.push_adapter.exceptions import DeliveryError, PushAdapterError
from src.push_adapter.models import (
    DispatchResult,
    Installation,
    NotificationPayload,
    PlatformResult,
    TenantConfig,
)
from src.push_adapter.transport import HttpxTransport, Transport
from src.push_adapter.translator import TRANSLATORS

logger = logging.getLogger(__name__)


class PushAdapter:
    """Sends push notifications to iOS and Android devices through OneSignal.

    Example:
        adapter = PushAdapter({"oneSignalAppId": "...", "oneSignalApiKey": "..."})
        result = await adapter.send({"data": {"alert": "Hi"}}, installations)
        await adapter.aclose()
    """

    def __init__(
        self,
        push_config: Optional[Union[Mapping, CredentialRegistry]] = None,
        transport: Optional[Transport] = None,
        config: Optional[PushAdapterConfig] = None,
    ):
        self.config = config or DEFAULT_PUSH_ADAPTER_CONFIG
        if isinstance(push_config, CredentialRegistry):
            self.registry = push_config
        else:
            self.registry = CredentialRegistry(push_config)

        self._owns_transport = transport is None
        self.transport = transport or HttpxTransport(self.config)
        self.dispatcher = BatchDispatcher(self.transport, self.config)
        self.valid_push_types = [t.lower() for t in self.config.valid_push_types]

        # platform value -> translator; push types without one are skipped at send time
        self._senders = {platform.value: TRANSLATORS[platform] for platform in Platform}

    @staticmethod
    def classify_installations(
        installations: Iterable[Union[Installation, dict]],
        valid_types: Iterable[str],
    ) -> dict[str, list[Installation]]:
        return classify_installations(installations, valid_types)

    def get_valid_push_types(self) -> list[str]:
        return list(self.valid_push_types)

    async def send(
        self,
        payload: Union[NotificationPayload, dict],
        installations: Iterable[Union[Installation, dict]],
    ) -> DispatchResult:
        """Deliver a payload to every supported installation.

        Raises:
            UnknownTenantError: the payload targets an unregistered tenant.
                Nothing is sent.
            DeliveryError: at least one platform failed. The first failure
                in platform order is raised; ``failed_platforms`` lists all.
        """
        if not isinstance(payload, NotificationPayload):
            payload = NotificationPayload.from_dict(payload)

        try:
            tenant = self.registry.resolve(payload.target_tenant)
        except PushAdapterError as e:
            logger.warning(e.message)
            raise

        with DispatchContext(tenant=tenant.name) as ctx:
            device_map = classify_installations(installations, self.valid_push_types)

            jobs = {}
            for push_type, devices in device_map.items():
                translate = self._senders.get(push_type)
                if translate is None:
                    logger.info(f"Can not find sender for push type {push_type}")
                    continue
                if not devices:
                    continue
                body = translate(payload.data)
                jobs[push_type] = self._dispatch_platform(push_type, body, devices, tenant)

            if not jobs:
                logger.info("No supported installations to send to")
                return DispatchResult(tenant=tenant.name)

            results = await asyncio.gather(*jobs.values(), return_exceptions=True)

            platform_results: list[PlatformResult] = []
            failures: list[DeliveryError] = []
            for push_type, result in zip(jobs.keys(), results):
                if isinstance(result, DeliveryError):
                    logger.error(f"Delivery to {push_type} failed: {result.message}")
                    failures.append(result)
                elif isinstance(result, BaseException):
                    raise result
                else:
                    platform_results.append(result)

            if failures:
                first = failures[0]
                first.failed_platforms = [f.platform for f in failures]
                raise first

            dispatch_result = DispatchResult(tenant=tenant.name, platforms=platform_results)
            logger.info(
                f"Sent push to {dispatch_result.total_devices} devices "
                f"in {dispatch_result.total_batches} batches",
                extra={
                    "devices": dispatch_result.total_devices,
                    "elapsed_ms": round(ctx.elapsed_ms, 2),
                },
            )
            return dispatch_result

    async def _dispatch_platform(self, push_type, body, devices, tenant: TenantConfig) -> PlatformResult:
        # Runs in its own task, so the binding stays local to this platform
        bind_platform(push_type)
        return await self.dispatcher.dispatch(body, devices, tenant)

    async def aclose(self) -> None:
        """Release the transport if the adapter created it."""
        if self._owns_transport and hasattr(self.transport, "aclose"):
            await self.transport.aclose()

    async def __aenter__(self) -> "PushAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

"""Chunked, sequential delivery of one platform body."""

import logging
import time
from typing import Optional, Sequence

from src.push_adapter.config import DEFAULT_PUSH_ADAPTER_CONFIG, PushAdapterConfig
from src.push_adapter.exceptions import ConfigurationError, DeliveryError
from src.push_adapter.models import (
    Installation,
    PlatformBody,
    PlatformResult,
    TenantConfig,
)
from src.push_adapter.transport import Transport

logger = logging.getLogger(__name__)


def build_headers(tenant: TenantConfig) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Basic {tenant.api_key}",
    }


class BatchDispatcher:
    """Sends a platform body to its devices in fixed-size chunks.

    Chunks go out one at a time: the next chunk is only posted once the
    previous response is known. The first failed chunk aborts the
    dispatch with a DeliveryError and the remaining chunks are never sent.
    """

    def __init__(self, transport: Transport, config: Optional[PushAdapterConfig] = None):
        self.config = config or DEFAULT_PUSH_ADAPTER_CONFIG
        if self.config.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {self.config.chunk_size}")
        self.transport = transport

    async def dispatch(
        self,
        body: PlatformBody,
        devices: Sequence[Installation],
        tenant: TenantConfig,
    ) -> PlatformResult:
        platform = body.platform.value
        chunk_size = self.config.chunk_size
        headers = build_headers(tenant)
        total = len(devices)
        offset = 0
        batch_index = 0

        while offset < total:
            tokens = [d.device_token for d in devices[offset:offset + chunk_size]]
            request = body.to_request(tenant.app_id, tokens)

            started = time.monotonic()
            try:
                resp = await self.transport.post(
                    self.config.host, self.config.path, headers, request
                )
            except Exception as e:
                # Timeouts and bad requests count as a failed batch, like a transport error
                logger.error(
                    f"OneSignal Error: {platform} batch {batch_index} "
                    f"failed with {type(e).__name__}: {e}",
                    extra={"batch_index": batch_index},
                )
                raise DeliveryError(platform, batch_index=batch_index) from e
            duration_ms = (time.monotonic() - started) * 1000

            if not resp.ok:
                logger.error(
                    f"OneSignal Error: {platform} batch {batch_index} "
                    f"returned {resp.status_code}: {resp.text}",
                    extra={"status_code": resp.status_code, "batch_index": batch_index},
                )
                raise DeliveryError(
                    platform,
                    status_code=resp.status_code,
                    batch_index=batch_index,
                )

            logger.debug(
                f"Sent {platform} batch {batch_index} ({len(tokens)} devices)",
                extra={
                    "batch_index": batch_index,
                    "batch_size": len(tokens),
                    "duration_ms": round(duration_ms, 2),
                    "status_code": resp.status_code,
                },
            )
            offset += chunk_size
            batch_index += 1

        return PlatformResult(platform=body.platform, devices=total, batches=batch_index)

"""Dispatch Context Management.

Task-safe logging context using contextvars for binding the dispatch
ID, tenant and platform to log entries. asyncio tasks copy the context
when they are created, so a platform bound inside one task does not
leak into a concurrently running task.
"""

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


_dispatch_id_var: ContextVar[str] = ContextVar("dispatch_id", default="")
_tenant_var: ContextVar[str] = ContextVar("tenant", default="")
_platform_var: ContextVar[str] = ContextVar("platform", default="")
_extra_context_var: ContextVar[dict] = ContextVar("extra_context", default={})


def generate_dispatch_id() -> str:
    """Generate a unique dispatch ID using UUID4."""
    return str(uuid.uuid4())


def get_dispatch_id() -> str:
    return _dispatch_id_var.get()


def get_tenant() -> str:
    return _tenant_var.get()


def get_platform() -> str:
    return _platform_var.get()


def bind_platform(platform: str) -> None:
    """Bind the platform for the rest of the current task."""
    _platform_var.set(platform)


def get_context_dict() -> dict[str, Any]:
    """Get all context variables as a dictionary for log binding."""
    ctx = {}
    dispatch_id = _dispatch_id_var.get()
    if dispatch_id:
        ctx["dispatch_id"] = dispatch_id
    tenant = _tenant_var.get()
    if tenant:
        ctx["tenant"] = tenant
    platform = _platform_var.get()
    if platform:
        ctx["platform"] = platform
    extra = _extra_context_var.get()
    if extra:
        ctx.update(extra)
    return ctx


@dataclass
class DispatchContext:
    """Context manager for send-scoped logging context.

    Example:
        with DispatchContext(tenant="default"):
            logger.info("sending")  # includes dispatch_id, tenant
    """

    dispatch_id: str = ""
    tenant: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
    started_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    _tokens: list = field(default_factory=list, repr=False)

    def __post_init__(self):
        if not self.dispatch_id:
            self.dispatch_id = generate_dispatch_id()

    def __enter__(self) -> "DispatchContext":
        self._tokens = [
            (_dispatch_id_var, _dispatch_id_var.set(self.dispatch_id)),
            (_tenant_var, _tenant_var.set(self.tenant)),
            (_platform_var, _platform_var.set("")),
            (_extra_context_var, _extra_context_var.set(self.extra.copy())),
        ]
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens.clear()

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since context was created."""
        delta = datetime.now(timezone.utc) - self.started_at
        return delta.total_seconds() * 1000

    def bind(self, **kwargs: Any) -> None:
        """Add extra key-value pairs to the context."""
        current = _extra_context_var.get()
        _extra_context_var.set({**current, **kwargs})
        self.extra.update(kwargs)

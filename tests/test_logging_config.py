"""Tests for structured logging and dispatch context."""

import asyncio
import json
import logging
import sys

import pytest

from src.logging_config.config import LogFormat, LoggingConfig, LogLevel
from src.logging_config.context import (
    DispatchContext,
    bind_platform,
    generate_dispatch_id,
    get_context_dict,
    get_dispatch_id,
    get_platform,
    get_tenant,
)
from src.logging_config.setup import (
    ConsoleFormatter,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def _record(msg="test", level=logging.INFO, name="test", exc_info=None, lineno=1):
    return logging.LogRecord(
        name=name, level=level, pathname="test.py",
        lineno=lineno, msg=msg, args=(), exc_info=exc_info,
    )


class TestLoggingConfig:
    """Tests for logging configuration dataclasses."""

    def test_default_config_values(self):
        config = LoggingConfig()
        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.JSON
        assert config.include_caller is True
        assert config.service_name == "push_adapter"

    def test_log_format_enum_values(self):
        assert LogFormat.JSON.value == "json"
        assert LogFormat.CONSOLE.value == "console"


class TestDispatchContext:
    """Tests for dispatch-scoped logging context."""

    def test_generate_dispatch_id_unique(self):
        ids = {generate_dispatch_id() for _ in range(100)}
        assert len(ids) == 100

    def test_context_sets_tenant_and_id(self):
        with DispatchContext(dispatch_id="d-1", tenant="fam"):
            assert get_dispatch_id() == "d-1"
            assert get_tenant() == "fam"
        assert get_dispatch_id() == ""
        assert get_tenant() == ""

    def test_auto_generates_dispatch_id(self):
        with DispatchContext() as ctx:
            assert ctx.dispatch_id != ""
            assert get_dispatch_id() == ctx.dispatch_id

    def test_nested_contexts_restore_outer(self):
        with DispatchContext(dispatch_id="outer", tenant="a"):
            with DispatchContext(dispatch_id="inner", tenant="b"):
                assert get_tenant() == "b"
            assert get_dispatch_id() == "outer"
            assert get_tenant() == "a"

    def test_context_dict_empty_outside(self):
        assert get_context_dict() == {}

    def test_bind_extra_context(self):
        with DispatchContext(tenant="t") as ctx:
            ctx.bind(devices=12)
            d = get_context_dict()
            assert d["devices"] == 12
            assert d["tenant"] == "t"

    def test_platform_binding_is_task_local(self):
        seen = {}

        async def worker(platform):
            bind_platform(platform)
            await asyncio.sleep(0.001)
            seen[platform] = get_context_dict()["platform"]

        async def main():
            with DispatchContext(tenant="t"):
                await asyncio.gather(worker("ios"), worker("android"))
                return get_platform()

        outer_platform = asyncio.run(main())
        assert seen == {"ios": "ios", "android": "android"}
        assert outer_platform == ""


class TestStructuredFormatter:
    """Tests for JSON structured log formatting."""

    def test_formats_as_json(self):
        parsed = json.loads(StructuredFormatter().format(_record("hello world")))
        assert parsed["message"] == "hello world"
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test"
        assert parsed["service"] == "push_adapter"
        assert "timestamp" in parsed

    def test_includes_caller_info(self):
        parsed = json.loads(StructuredFormatter(include_caller=True).format(_record(lineno=42)))
        assert parsed["line"] == 42
        assert "function" in parsed

    def test_excludes_caller_when_disabled(self):
        parsed = json.loads(StructuredFormatter(include_caller=False).format(_record()))
        assert "line" not in parsed

    def test_includes_dispatch_context(self):
        formatter = StructuredFormatter()
        with DispatchContext(dispatch_id="d-9", tenant="work"):
            bind_platform("ios")
            parsed = json.loads(formatter.format(_record()))
        assert parsed["dispatch_id"] == "d-9"
        assert parsed["tenant"] == "work"
        assert parsed["platform"] == "ios"

    def test_formats_exception(self):
        try:
            raise ValueError("test error")
        except ValueError:
            record = _record("failed", level=logging.ERROR, exc_info=sys.exc_info())
        parsed = json.loads(StructuredFormatter().format(record))
        assert parsed["exception"]["type"] == "ValueError"

    def test_includes_batch_fields(self):
        record = _record()
        record.batch_index = 3
        record.status_code = 400
        record.duration_ms = 12.5
        parsed = json.loads(StructuredFormatter().format(record))
        assert parsed["batch_index"] == 3
        assert parsed["status_code"] == 400
        assert parsed["duration_ms"] == 12.5


class TestConsoleFormatter:
    """Tests for colored console log formatting."""

    def test_formats_readable_output(self):
        output = ConsoleFormatter().format(_record("hello", name="push.adapter"))
        assert "push.adapter" in output
        assert "hello" in output

    def test_includes_context_info(self):
        with DispatchContext(tenant="fam"):
            output = ConsoleFormatter().format(_record())
        assert "tenant=fam" in output

    def test_has_color_codes(self):
        output = ConsoleFormatter().format(_record(level=logging.ERROR))
        assert "\033[31m" in output

    def test_shows_batch_fields(self):
        record = _record("sent batch")
        record.batch_index = 2
        record.duration_ms = 8.5
        output = ConsoleFormatter().format(record)
        assert "batch_index=2" in output
        assert "duration_ms=8.5" in output

    def test_no_extras_section_without_fields(self):
        output = ConsoleFormatter().format(_record("plain"))
        assert "plain (" not in output


class TestConfigureLogging:
    """Tests for the configure_logging setup function."""

    def test_json_format(self):
        configure_logging(LoggingConfig(format=LogFormat.JSON))
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_console_format(self):
        configure_logging(LoggingConfig(format=LogFormat.CONSOLE))
        assert isinstance(logging.getLogger().handlers[0].formatter, ConsoleFormatter)

    def test_sets_log_level(self):
        configure_logging(LoggingConfig(level=LogLevel.DEBUG))
        assert logging.getLogger().level == logging.DEBUG

    def test_quiets_httpx(self):
        configure_logging()
        assert logging.getLogger("httpx").level >= logging.WARNING

    def test_env_var_override_level(self, monkeypatch):
        monkeypatch.setenv("PUSH_ADAPTER_LOG_LEVEL", "debug")
        configure_logging(LoggingConfig(level=LogLevel.ERROR))
        assert logging.getLogger().level == logging.DEBUG

    def test_env_var_override_format(self, monkeypatch):
        monkeypatch.setenv("PUSH_ADAPTER_LOG_FORMAT", "CONSOLE")
        configure_logging(LoggingConfig(format=LogFormat.JSON))
        assert isinstance(logging.getLogger().handlers[0].formatter, ConsoleFormatter)

    def test_get_logger_returns_logger(self):
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"


class TestAdapterLogging:
    """Log output produced while sending."""

    @pytest.mark.asyncio
    async def test_delivery_failure_logged(self, caplog, push_config, make_transport, installations):
        from src.push_adapter import DeliveryError, PushAdapter

        transport = make_transport(statuses={"include_ios_tokens": [400]})
        adapter = PushAdapter(push_config, transport=transport)

        with caplog.at_level(logging.DEBUG):
            with pytest.raises(DeliveryError):
                await adapter.send({"data": {}}, installations("ios", 1))

        messages = [r.getMessage() for r in caplog.records]
        assert any("returned 400" in m for m in messages)
        failed = [r for r in caplog.records if "returned 400" in r.getMessage()]
        assert failed[0].status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_tenant_logged(self, caplog, push_config, transport):
        from src.push_adapter import PushAdapter, UnknownTenantError

        adapter = PushAdapter(push_config, transport=transport)
        with caplog.at_level(logging.WARNING):
            with pytest.raises(UnknownTenantError):
                await adapter.send({"data": {}, "targetTenant": "ghost"}, [])
        assert "Unknown OneSignal project: ghost" in caplog.text

    @pytest.mark.asyncio
    async def test_summary_logs_elapsed_ms(self, caplog, push_config, transport, installations):
        from src.push_adapter import PushAdapter

        adapter = PushAdapter(push_config, transport=transport)
        with caplog.at_level(logging.INFO):
            await adapter.send({"data": {}}, installations("ios", 3))

        summary = [r for r in caplog.records if r.getMessage().startswith("Sent push to 3 devices")]
        assert len(summary) == 1
        assert summary[0].elapsed_ms >= 0
        parsed = json.loads(StructuredFormatter().format(summary[0]))
        assert "elapsed_ms" in parsed
        assert parsed["devices"] == 3

    @pytest.mark.asyncio
    async def test_transport_exception_logged(self, caplog, push_config, make_transport, installations):
        from src.push_adapter import DeliveryError, PushAdapter

        transport = make_transport(statuses={"include_ios_tokens": [ValueError("bad body")]})
        adapter = PushAdapter(push_config, transport=transport)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(DeliveryError):
                await adapter.send({"data": {}}, installations("ios", 1))

        assert "failed with ValueError: bad body" in caplog.text

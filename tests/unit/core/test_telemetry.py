# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for telemetry infrastructure."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from PocketBase.Users.core.telemetry import (
    NoOpTelemetryManager,
    RequestContext,
    ResponseContext,
    TelemetryConfig,
    TelemetryHook,
    TelemetryManager,
    create_telemetry_manager,
)
from fixtures.test_data import MockClient, make_user_data


class TestTelemetryConfig:
    """Tests for TelemetryConfig dataclass."""

    def test_default_config_disabled(self):
        config = TelemetryConfig()
        assert config.enable_tracing is False
        assert config.enable_logging is False
        assert config.log_level == "WARNING"
        assert config.logger_name == "PocketBase.Users"
        assert config.hooks == []

    def test_config_is_frozen(self):
        config = TelemetryConfig()
        with pytest.raises(AttributeError):
            config.enable_tracing = True


class TestCreateTelemetryManager:
    """Tests for the create_telemetry_manager factory."""

    def test_returns_noop_when_config_none(self):
        assert isinstance(create_telemetry_manager(None), NoOpTelemetryManager)

    def test_returns_noop_when_all_disabled(self):
        assert isinstance(create_telemetry_manager(TelemetryConfig()), NoOpTelemetryManager)

    def test_returns_manager_when_logging_enabled(self):
        assert isinstance(create_telemetry_manager(TelemetryConfig(enable_logging=True)), TelemetryManager)

    def test_returns_manager_when_hooks_present(self):
        assert isinstance(create_telemetry_manager(TelemetryConfig(hooks=[MagicMock()])), TelemetryManager)


class TestTelemetryHookProtocol:
    def test_custom_hook_is_recognized(self):
        class CountingHook:
            def __init__(self):
                self.count = 0

            def on_request_start(self, context):
                self.count += 1

            def on_request_end(self, request, response):
                pass

            def on_request_error(self, request, error):
                pass

        assert isinstance(CountingHook(), TelemetryHook)


class TestTelemetryManager:
    """Tests for TelemetryManager."""

    def test_hooks_dispatched_on_request_start(self):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with manager.trace_request(
            operation="users.get",
            method="GET",
            url="http://127.0.0.1:8090/api/collections/users/records/abc",
            client_request_id="123",
            collection="users",
        ) as ctx:
            pass

        hook.on_request_start.assert_called_once_with(ctx)
        assert ctx.collection == "users"

    def test_hooks_dispatched_on_request_end(self):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with manager.trace_request("users.list", "GET", "http://pb.test", "123") as ctx:
            manager.record_response(ctx, status_code=200)

        hook.on_request_end.assert_called_once()
        response = hook.on_request_end.call_args[0][1]
        assert isinstance(response, ResponseContext)
        assert response.status_code == 200
        assert response.duration_ms >= 0

    def test_hooks_dispatched_on_request_error(self):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with pytest.raises(ValueError):
            with manager.trace_request("users.get", "GET", "http://pb.test", "123"):
                raise ValueError("Test error")

        hook.on_request_error.assert_called_once()
        assert isinstance(hook.on_request_error.call_args[0][1], ValueError)

    def test_hook_errors_do_not_break_request(self):
        hook = MagicMock()
        hook.on_request_start.side_effect = Exception("Hook error")
        hook.on_request_end.side_effect = Exception("Hook error")
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        # Should not raise
        with manager.trace_request("users.get", "GET", "http://pb.test", "123") as ctx:
            manager.record_response(ctx, status_code=200)

    def test_partial_hook_without_methods(self):
        class StartOnly:
            def __init__(self):
                self.seen = []

            def on_request_start(self, context):
                self.seen.append(context.operation)

        hook = StartOnly()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))
        with manager.trace_request("auth.refresh", "POST", "http://pb.test", "1") as ctx:
            manager.record_response(ctx, 200)
        assert hook.seen == ["auth.refresh"]

    def test_logging_levels(self, caplog):
        manager = TelemetryManager(TelemetryConfig(enable_logging=True, log_level="DEBUG", logger_name="pb.test"))

        with caplog.at_level(logging.DEBUG, logger="pb.test"):
            with manager.trace_request("users.get", "GET", "http://pb.test", "1") as ctx:
                manager.record_response(ctx, 200)
            with manager.trace_request("users.get", "GET", "http://pb.test", "2") as ctx:
                manager.record_response(ctx, 404)

        levels = [(r.levelno, r.getMessage().split()[2]) for r in caplog.records]
        assert levels == [(logging.DEBUG, "200"), (logging.WARNING, "404")]

    def test_logs_warning_on_exception(self, caplog):
        manager = TelemetryManager(TelemetryConfig(enable_logging=True, logger_name="pb.test"))

        with caplog.at_level(logging.WARNING, logger="pb.test"):
            with pytest.raises(RuntimeError):
                with manager.trace_request("users.delete", "DELETE", "http://pb.test", "1"):
                    raise RuntimeError("boom")

        assert any("users.delete DELETE failed: boom" in r.getMessage() for r in caplog.records)

    def test_tracing_disabled_when_otel_unavailable(self):
        with patch("PocketBase.Users.core.telemetry._OTEL_AVAILABLE", False):
            manager = TelemetryManager(TelemetryConfig(enable_tracing=True))
            assert manager._tracer is None


class TestNoOpTelemetryManager:
    """Tests for NoOpTelemetryManager."""

    def test_trace_request_returns_context(self):
        manager = NoOpTelemetryManager()

        with manager.trace_request("users.list", "GET", "http://pb.test", "123", collection="users") as ctx:
            assert ctx.operation == "users.list"
            assert ctx.method == "GET"
            assert ctx.collection == "users"

    def test_record_response_is_noop(self):
        # Should not raise
        NoOpTelemetryManager().record_response(None, 200)


class TestRequestContext:
    def test_default_start_time(self):
        ctx = RequestContext(client_request_id="req-1", method="GET", url="http://pb.test", operation="users.get")
        assert ctx.start_time > 0
        assert ctx.collection is None


class TestOpenTelemetryIntegration:
    """Tests for OpenTelemetry integration when the API is available."""

    @pytest.fixture
    def mock_otel(self):
        with patch("PocketBase.Users.core.telemetry._OTEL_AVAILABLE", True), patch(
            "PocketBase.Users.core.telemetry.trace"
        ) as mock_trace, patch("PocketBase.Users.core.telemetry.Status") as mock_status, patch(
            "PocketBase.Users.core.telemetry.StatusCode"
        ) as mock_status_code:
            mock_tracer = MagicMock()
            mock_trace.get_tracer.return_value = mock_tracer
            mock_trace.SpanKind.CLIENT = "CLIENT"
            mock_span = MagicMock()
            mock_tracer.start_span.return_value = mock_span
            mock_status_code.ERROR = "ERROR"
            yield {"trace": mock_trace, "tracer": mock_tracer, "span": mock_span, "status": mock_status}

    def test_tracer_initialized_when_tracing_enabled(self, mock_otel):
        TelemetryManager(TelemetryConfig(enable_tracing=True))
        mock_otel["trace"].get_tracer.assert_called_once_with("PocketBase.Users")

    def test_span_created_with_collection(self, mock_otel):
        manager = TelemetryManager(TelemetryConfig(enable_tracing=True))

        with manager.trace_request("users.create", "POST", "http://pb.test", "req-123", collection="users"):
            pass

        name = mock_otel["tracer"].start_span.call_args[0][0]
        attributes = mock_otel["tracer"].start_span.call_args.kwargs["attributes"]
        assert name == "PocketBase users.create users"
        assert attributes["db.system"] == "pocketbase"
        assert attributes["pocketbase.collection"] == "users"
        mock_otel["span"].end.assert_called_once()

    def test_status_code_attribute_recorded(self, mock_otel):
        manager = TelemetryManager(TelemetryConfig(enable_tracing=True))

        with manager.trace_request("users.get", "GET", "http://pb.test", "1") as ctx:
            manager.record_response(ctx, 404)

        mock_otel["span"].set_attribute.assert_called_once_with("http.status_code", 404)

    def test_span_records_exception_on_error(self, mock_otel):
        manager = TelemetryManager(TelemetryConfig(enable_tracing=True))

        with pytest.raises(ValueError):
            with manager.trace_request("users.get", "GET", "http://pb.test", "1"):
                raise ValueError("Test error")

        mock_otel["span"].record_exception.assert_called_once()
        mock_otel["span"].set_status.assert_called_once()
        mock_otel["span"].end.assert_called_once()


class TestClientTelemetry:
    """Telemetry wiring through the low-level client."""

    def test_operation_names_reach_hooks(self):
        from PocketBase.Users.core.config import PocketBaseConfig

        hook = MagicMock()
        config = PocketBaseConfig(telemetry=TelemetryConfig(hooks=[hook]))
        c = MockClient([(200, make_user_data())], config=config)

        c._get_user("a1b2c3d4e5f6g7h")

        ctx = hook.on_request_start.call_args[0][0]
        assert ctx.operation == "users.get"
        assert ctx.method == "GET"
        assert ctx.collection == "users"
        assert ctx.url.endswith("/api/collections/users/records/a1b2c3d4e5f6g7h")
        assert hook.on_request_end.call_args[0][1].status_code == 200

    def test_request_ids_are_unique(self):
        from PocketBase.Users.core.config import PocketBaseConfig

        hook = MagicMock()
        config = PocketBaseConfig(telemetry=TelemetryConfig(hooks=[hook]))
        c = MockClient([(200, make_user_data()), (200, make_user_data())], config=config)

        c._get_user("a")
        c._get_user("b")

        ids = {call[0][0].client_request_id for call in hook.on_request_start.call_args_list}
        assert len(ids) == 2

    def test_error_status_logged_once(self, caplog):
        from PocketBase.Users.core.config import PocketBaseConfig
        from PocketBase.Users.core.errors import NotFoundError

        config = PocketBaseConfig(telemetry=TelemetryConfig(enable_logging=True, logger_name="pb.client"))
        c = MockClient([(404, {"message": "The requested resource wasn't found."})], config=config)

        with caplog.at_level(logging.WARNING, logger="pb.client"):
            with pytest.raises(NotFoundError):
                c._get_user("missing")

        warnings = [r for r in caplog.records if r.name == "pb.client" and r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "users.get GET 404" in warnings[0].getMessage()

    def test_transport_failure_logged(self, caplog):
        import requests

        from PocketBase.Users.core.config import PocketBaseConfig
        from PocketBase.Users.core.errors import TransportError

        config = PocketBaseConfig(telemetry=TelemetryConfig(enable_logging=True, logger_name="pb.client"))
        c = MockClient([requests.exceptions.ConnectionError("down")], config=config)

        with caplog.at_level(logging.WARNING, logger="pb.client"):
            with pytest.raises(TransportError):
                c._get_user("a1b2c3d4e5f6g7h")

        warnings = [r for r in caplog.records if r.name == "pb.client"]
        assert len(warnings) == 1
        assert "users.get GET failed" in warnings[0].getMessage()

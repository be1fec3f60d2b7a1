"""Unit tests for correlation ID functionality."""

import logging
import uuid

from reqparse.domain.correlation_id import (
    CorrelationLoggerAdapter,
    component_for,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
)


def test_generate_correlation_id_returns_unique_uuids():
    first = generate_correlation_id()
    second = generate_correlation_id()

    uuid.UUID(first)
    assert first != second


def test_correlation_scope_binds_and_restores():
    """The id is visible inside the block and reset afterwards."""
    assert get_correlation_id() is None
    with correlation_scope("outer") as outer:
        assert outer == "outer"
        with correlation_scope() as inner:
            assert get_correlation_id() == inner
            assert inner != "outer"
        assert get_correlation_id() == "outer"
    assert get_correlation_id() is None


def test_component_for_strips_project_prefix():
    assert component_for("reqparse.transport.worker") == "transport.worker"
    assert component_for("other") == "other"


def test_adapter_injects_correlation_id_and_component(caplog):
    caplog.set_level(logging.INFO, logger="reqparse")
    adapter = CorrelationLoggerAdapter(logging.getLogger("reqparse.grammar"), {})

    with correlation_scope("cid-1"):
        adapter.info("hello", extra={"event": "greeting"})
    adapter.info("outside")

    inside, outside = caplog.records[-2:]
    assert inside.correlation_id == "cid-1"
    assert inside.component == "grammar"
    assert inside.event == "greeting"
    assert outside.correlation_id == "-"

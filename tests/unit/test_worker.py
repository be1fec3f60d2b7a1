"""Unit tests for the per-connection worker."""

import logging
import socket
import threading
from unittest.mock import MagicMock

import pytest

from reqparse.bootstrap.config import DriverConfig
from reqparse.lifecycle.state import ServerLifecycle
from reqparse.transport.context import WorkerContext
from reqparse.transport.worker import handle_client

CLIENT = ("127.0.0.1", 50000)


@pytest.fixture(name="mock_socket")
def fixture_mock_socket():
    """Create a mock socket that yields nothing by default."""
    sock = MagicMock(spec=socket.socket)
    sock.recv.return_value = b""
    return sock


def _sent(mock_socket) -> bytes:
    return b"".join(call.args[0] for call in mock_socket.sendall.call_args_list)


def test_handle_client_answers_once_and_closes(mock_socket):
    mock_socket.recv.side_effect = [b"GET / HTTP/1.1\r\nHost: x\r\n\r\n"]
    lifecycle = ServerLifecycle()
    context = WorkerContext(DriverConfig(socket_timeout=7), lifecycle)

    handle_client(mock_socket, CLIENT, context)

    assert _sent(mock_socket).startswith(b"HTTP/1.1 200 OK\r\n")
    mock_socket.settimeout.assert_called_once_with(7)
    mock_socket.close.assert_called_once()
    assert lifecycle.active_worker_count() == 0


def test_handle_client_sends_400_for_malformed_request(mock_socket):
    mock_socket.recv.side_effect = [b"GET / HTTP/1.1\r\nbroken\r\n\r\n"]

    handle_client(mock_socket, CLIENT, WorkerContext(DriverConfig()))

    assert _sent(mock_socket).startswith(b"HTTP/1.1 400 Bad Request\r\n")


def test_handle_client_sends_413_past_the_limit(mock_socket):
    mock_socket.recv.side_effect = [b"x" * 16, b"x" * 16]
    config = DriverConfig(read_size=16, max_request_bytes=16)

    handle_client(mock_socket, CLIENT, WorkerContext(config))

    assert _sent(mock_socket).startswith(b"HTTP/1.1 413 Payload Too Large\r\n")


def test_handle_client_stays_silent_when_peer_sends_nothing(mock_socket):
    handle_client(mock_socket, CLIENT, WorkerContext(DriverConfig()))

    mock_socket.sendall.assert_not_called()
    mock_socket.close.assert_called_once()


def test_handle_client_refuses_work_while_draining(mock_socket):
    lifecycle = ServerLifecycle()
    lifecycle.begin_draining()

    handle_client(mock_socket, CLIENT, WorkerContext(DriverConfig(), lifecycle))

    mock_socket.recv.assert_not_called()
    assert _sent(mock_socket).startswith(b"HTTP/1.1 503 Service Unavailable\r\n")


def test_handle_client_logs_socket_errors(mock_socket, caplog):
    caplog.set_level(logging.DEBUG, logger="reqparse")
    mock_socket.recv.side_effect = ConnectionResetError()

    handle_client(mock_socket, CLIENT, WorkerContext(DriverConfig()))

    record = next(r for r in caplog.records if getattr(r, "event", "") == "connection_error")
    assert record.error_type == "ConnectionResetError"
    assert record.client == "127.0.0.1:50000"
    mock_socket.close.assert_called_once()


def test_handle_client_logs_unexpected_errors(mock_socket, caplog):
    caplog.set_level(logging.DEBUG, logger="reqparse")
    mock_socket.recv.side_effect = RuntimeError("boom")

    handle_client(mock_socket, CLIENT, WorkerContext(DriverConfig()))

    record = next(r for r in caplog.records if getattr(r, "event", "") == "worker_error")
    assert record.exc_info is not None
    mock_socket.close.assert_called_once()


def test_lifecycle_waits_for_registered_workers():
    lifecycle = ServerLifecycle()
    release = threading.Event()
    worker = threading.Thread(target=release.wait)
    worker.start()
    lifecycle.register_worker(worker)

    assert lifecycle.wait_for_workers(0.05) is False
    release.set()
    assert lifecycle.wait_for_workers(2.0) is True
    assert lifecycle.active_worker_count() == 0

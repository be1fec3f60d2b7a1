"""Per-connection worker: read one request, answer once, close."""

import logging
import socket
import threading

from reqparse.domain.correlation_id import CorrelationLoggerAdapter, correlation_scope
from reqparse.domain.response_builders import draining_response, entity_too_large_response
from reqparse.pipeline.inspection import inspect_request
from reqparse.pipeline.io import RequestTooLarge, receive_raw_request, send_response
from reqparse.transport.context import WorkerContext

WORKER_LOGGER = CorrelationLoggerAdapter(
    logging.getLogger("reqparse.transport.worker"), {}
)


def _serve_one(
    client_socket: socket.socket, client_addr_str: str, context: WorkerContext
) -> None:
    if context.lifecycle is not None and context.lifecycle.is_draining():
        send_response(client_socket, draining_response())
        return

    try:
        raw = receive_raw_request(client_socket, context.config)
    except RequestTooLarge:
        WORKER_LOGGER.warning(
            "Request size exceeded limit",
            extra={"event": "request_too_large", "client": client_addr_str},
        )
        send_response(
            client_socket, entity_too_large_response(context.config.max_request_bytes)
        )
        return

    if not raw:
        WORKER_LOGGER.debug(
            "Client closed without sending a request",
            extra={"event": "client_disconnected", "client": client_addr_str},
        )
        return

    send_response(client_socket, inspect_request(raw, client_addr_str))


def _close_socket(client_socket: socket.socket) -> None:
    try:
        client_socket.shutdown(socket.SHUT_WR)
    except OSError:
        pass
    client_socket.close()


def handle_client(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> None:
    """Serve a single request on ``client_socket`` and close it."""
    client_addr_str = f"{client_address[0]}:{client_address[1]}"
    current_thread = threading.current_thread()
    lifecycle = context.lifecycle
    if lifecycle is not None:
        lifecycle.register_worker(current_thread)
    client_socket.settimeout(context.config.socket_timeout)

    with correlation_scope():
        try:
            _serve_one(client_socket, client_addr_str, context)
        except (ConnectionError, TimeoutError, OSError) as error:
            WORKER_LOGGER.error(
                "Error handling client connection",
                extra={
                    "event": "connection_error",
                    "client": client_addr_str,
                    "error_type": type(error).__name__,
                },
            )
        except Exception as error:  # pylint: disable=broad-except
            WORKER_LOGGER.error(
                "Unexpected error in worker",
                extra={
                    "event": "worker_error",
                    "client": client_addr_str,
                    "error_type": type(error).__name__,
                },
                exc_info=True,
            )
        finally:
            _close_socket(client_socket)
            if lifecycle is not None:
                lifecycle.cleanup_worker(current_thread)
            WORKER_LOGGER.debug(
                "Socket closed",
                extra={"event": "socket_closed", "client": client_addr_str},
            )

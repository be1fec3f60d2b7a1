"""Main connection acceptance loop."""

import argparse
import logging
import socket
import threading

from reqparse.bootstrap.socket_factory import create_server_socket
from reqparse.domain.correlation_id import CorrelationLoggerAdapter
from reqparse.lifecycle.state import ServerLifecycle
from reqparse.transport.context import WorkerContext
from reqparse.transport.worker import handle_client

ACCEPT_LOGGER = CorrelationLoggerAdapter(
    logging.getLogger("reqparse.transport.accept"), {}
)


def _spawn_worker(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> threading.Thread:
    """Start a tracked worker thread for one accepted connection."""
    if ACCEPT_LOGGER.logger.isEnabledFor(logging.DEBUG):
        ACCEPT_LOGGER.debug(
            "Client connection accepted",
            extra={
                "event": "client_accepted",
                "client": f"{client_address[0]}:{client_address[1]}",
            },
        )
    thread = threading.Thread(
        target=handle_client,
        args=(client_socket, client_address, context),
        daemon=False,
    )
    thread.start()
    return thread


def run_server(
    args: argparse.Namespace, context: WorkerContext, lifecycle: ServerLifecycle
) -> None:
    """Accept connections until the lifecycle starts draining."""
    server_socket = create_server_socket(args.host, args.port)

    ACCEPT_LOGGER.info(
        "Server listening for connections",
        extra={"event": "server_listening", "host": args.host, "port": args.port},
    )

    try:
        while not lifecycle.is_draining():
            try:
                client_socket, client_address = server_socket.accept()
            except socket.timeout:
                continue
            except OSError as error:
                if lifecycle.is_draining():
                    break
                ACCEPT_LOGGER.error(
                    "Socket accept failed",
                    extra={"event": "accept_error", "error_type": type(error).__name__},
                )
                continue

            _spawn_worker(client_socket, client_address[:2], context)
    finally:
        server_socket.close()
        grace_seconds = context.config.shutdown_grace_seconds
        ACCEPT_LOGGER.info(
            "Waiting for active connections to complete",
            extra={"event": "shutdown_waiting", "grace_seconds": grace_seconds},
        )
        lifecycle.wait_for_workers(grace_seconds)
        ACCEPT_LOGGER.info("Server shutdown complete", extra={"event": "server_stopped"})

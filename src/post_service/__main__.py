"""Process entry point: ``python -m post_service`` or ``post-service``."""

from __future__ import annotations

import signal
import sys
import threading
from types import FrameType

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from post_service.adapters.inbound.grpc_server import TransportStartupError
from post_service.infrastructure.config import get_config
from post_service.infrastructure.container import Container
from post_service.infrastructure.logging import get_logger, setup_logging
from post_service.ports.outbound import RepositoryError


def _start_rest_gateway(container: Container, port: int) -> threading.Thread:
    from post_service.adapters.inbound.rest_api import run_server

    thread = threading.Thread(
        target=run_server,
        args=(container.service, container.config.server.host, port),
        name="rest-gateway",
        daemon=True,
    )
    thread.start()
    return thread


def main() -> int:
    """Run the post service until SIGINT or SIGTERM.

    Returns:
        Process exit status: 0 on clean shutdown, 1 on startup failure
    """
    try:
        config = get_config()
    except ValidationError as e:
        setup_logging()
        get_logger(__name__).error("invalid_configuration", error=str(e))
        return 1

    setup_logging(config.observability.log_level, config.observability.log_format)
    logger = get_logger(__name__)

    try:
        container = Container.create(config)
        server = container.build_grpc_server()
    except (RepositoryError, SQLAlchemyError, TransportStartupError, OSError) as e:
        logger.error("startup_failed", error=str(e))
        return 1

    stop = threading.Event()

    def _handle_signal(signum: int, frame: FrameType | None) -> None:
        logger.info("shutdown_requested", signal=signal.Signals(signum).name)
        stop.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    server.start()
    if config.server.rest_port is not None:
        _start_rest_gateway(container, config.server.rest_port)
        logger.info("rest_gateway_started", port=config.server.rest_port)

    stop.wait()
    server.stop(config.server.grace_period_seconds)
    container.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

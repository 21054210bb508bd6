"""Inbound adapters - transports exposing the post service.

- grpc_server: the primary RPC endpoint
- rest_api: an HTTP gateway over the same operations
"""

from post_service.adapters.inbound.grpc_server import (
    SERVICE_NAME,
    PostGrpcServer,
    PostServicer,
    TransportStartupError,
)
from post_service.adapters.inbound.rest_api import create_app

__all__ = [
    "SERVICE_NAME",
    "PostGrpcServer",
    "PostServicer",
    "TransportStartupError",
    "create_app",
]

"""gRPC adapter for the post service.

Binds the PostServiceAPI operations one-to-one to unary RPCs of the
``post.Post`` service. Messages are JSON documents (see ``messages``) carried
as raw bytes, so no generated stubs are needed on either side.

RPCs:
    ListPosts, GetPost, CreatePost, UpdatePost, DeletePost,
    CheckExists, GetOwner, ListCategories, CreateCategory

Usage:
    server = PostGrpcServer(PostServicer(service), port=50051)
    server.start()
    server.wait_for_termination()

A client calls a method through a plain channel:

    call = channel.unary_unary("/post.Post/GetPost")
    reply = json.loads(call(json.dumps({"uid": uid}).encode()))
"""

from __future__ import annotations

import time
from concurrent import futures
from pathlib import Path
from typing import Callable, Sequence, TypeVar

import grpc
from pydantic import BaseModel, ValidationError

from post_service.adapters.inbound.messages import (
    CheckExistsRequest,
    CheckExistsResponse,
    CreateCategoryRequest,
    CreatePostRequest,
    DeletePostRequest,
    DeletePostResponse,
    GetOwnerRequest,
    GetOwnerResponse,
    GetPostRequest,
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListPostsRequest,
    ListPostsResponse,
    Message,
    SingleCategory,
    SinglePost,
    UpdatePostRequest,
    UpdatePostResponse,
)
from post_service.domain.value_objects import ErrorKind, Result
from post_service.infrastructure.config import TLSConfig
from post_service.infrastructure.logging import get_logger
from post_service.infrastructure.metrics import MetricsRegistry
from post_service.ports.inbound import PostServiceAPI

logger = get_logger(__name__)

T = TypeVar("T")

SERVICE_NAME = "post.Post"

STATUS_CODES: dict[ErrorKind, grpc.StatusCode] = {
    ErrorKind.INVALID_ARGUMENT: grpc.StatusCode.INVALID_ARGUMENT,
    ErrorKind.NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    ErrorKind.INTERNAL: grpc.StatusCode.INTERNAL,
    ErrorKind.UNAUTHENTICATED: grpc.StatusCode.UNAUTHENTICATED,
}


class RpcAbort(Exception):
    """Raised by servicer methods to end a call with a non-OK status."""

    def __init__(self, code: grpc.StatusCode, details: str) -> None:
        super().__init__(f"{code.name}: {details}")
        self.code = code
        self.details = details


class TransportStartupError(Exception):
    """Raised when the server cannot load credentials or bind its port."""


def _unwrap(result: Result[T]) -> T:
    if result.error is not None:
        raise RpcAbort(STATUS_CODES[result.error.kind], result.error.message)
    return result.value  # type: ignore[return-value]


def _decode(request_type: type[BaseModel], raw: bytes) -> BaseModel:
    try:
        return request_type.model_validate_json(raw or b"{}")
    except ValidationError as e:
        raise RpcAbort(
            grpc.StatusCode.INVALID_ARGUMENT,
            f"malformed {request_type.__name__}: {e.error_count()} invalid field(s)",
        ) from e


class PostServicer:
    """Translates RPC messages to PostServiceAPI calls and back."""

    def __init__(self, service: PostServiceAPI, metrics: MetricsRegistry | None = None) -> None:
        self._service = service
        self._metrics = metrics

    # ------------------------------------------------------------------
    # RPC methods
    # ------------------------------------------------------------------

    def ListPosts(self, request: ListPostsRequest) -> ListPostsResponse:
        page = _unwrap(
            self._service.list_posts(request.category_uid, request.page_size, request.page_number)
        )
        return ListPostsResponse(
            posts=[SinglePost.from_entity(p) for p in page.items],
            page_size=page.page_size,
            page_number=page.page_number,
        )

    def GetPost(self, request: GetPostRequest) -> SinglePost:
        return SinglePost.from_entity(_unwrap(self._service.get_post(request.uid)))

    def CreatePost(self, request: CreatePostRequest) -> SinglePost:
        post = _unwrap(
            self._service.create_post(
                request.title, request.url, request.user_uid, request.category_uid
            )
        )
        return SinglePost.from_entity(post)

    def UpdatePost(self, request: UpdatePostRequest) -> UpdatePostResponse:
        _unwrap(self._service.update_post(request.uid, request.title, request.url))
        return UpdatePostResponse()

    def DeletePost(self, request: DeletePostRequest) -> DeletePostResponse:
        _unwrap(self._service.delete_post(request.uid))
        return DeletePostResponse()

    def CheckExists(self, request: CheckExistsRequest) -> CheckExistsResponse:
        return CheckExistsResponse(exists=_unwrap(self._service.check_post_exists(request.uid)))

    def GetOwner(self, request: GetOwnerRequest) -> GetOwnerResponse:
        return GetOwnerResponse(owner_uid=_unwrap(self._service.get_post_owner(request.uid)))

    def ListCategories(self, request: ListCategoriesRequest) -> ListCategoriesResponse:
        page = _unwrap(self._service.list_categories(request.page_size, request.page_number))
        return ListCategoriesResponse(
            categories=[SingleCategory.from_entity(c) for c in page.items],
            page_size=page.page_size,
            page_number=page.page_number,
        )

    def CreateCategory(self, request: CreateCategoryRequest) -> SingleCategory:
        category = _unwrap(self._service.create_category(request.name, request.user_uid))
        return SingleCategory.from_entity(category)

    # ------------------------------------------------------------------
    # Handler registration
    # ------------------------------------------------------------------

    def generic_handler(self) -> grpc.GenericRpcHandler:
        """Build the generic handler registering every RPC method."""
        methods: dict[str, tuple[type[BaseModel], Callable[..., Message]]] = {
            "ListPosts": (ListPostsRequest, self.ListPosts),
            "GetPost": (GetPostRequest, self.GetPost),
            "CreatePost": (CreatePostRequest, self.CreatePost),
            "UpdatePost": (UpdatePostRequest, self.UpdatePost),
            "DeletePost": (DeletePostRequest, self.DeletePost),
            "CheckExists": (CheckExistsRequest, self.CheckExists),
            "GetOwner": (GetOwnerRequest, self.GetOwner),
            "ListCategories": (ListCategoriesRequest, self.ListCategories),
            "CreateCategory": (CreateCategoryRequest, self.CreateCategory),
        }
        handlers = {
            name: grpc.unary_unary_rpc_method_handler(self._behavior(name, request_type, method))
            for name, (request_type, method) in methods.items()
        }
        return grpc.method_handlers_generic_handler(SERVICE_NAME, handlers)

    def _behavior(
        self,
        name: str,
        request_type: type[BaseModel],
        method: Callable[..., Message],
    ) -> Callable[[bytes, grpc.ServicerContext], bytes]:
        def behavior(raw: bytes, context: grpc.ServicerContext) -> bytes:
            start = time.perf_counter()
            try:
                response = method(_decode(request_type, raw))
            except RpcAbort as e:
                self._observe(name, e.code, start)
                logger.debug("rpc_failed", method=name, code=e.code.name, details=e.details)
                context.abort(e.code, e.details)
            self._observe(name, grpc.StatusCode.OK, start)
            return response.to_bytes()

        return behavior

    def _observe(self, name: str, code: grpc.StatusCode, start: float) -> None:
        if self._metrics is not None:
            self._metrics.observe_rpc(name, code.name, time.perf_counter() - start)


def load_server_credentials(cert_file: Path, key_file: Path) -> grpc.ServerCredentials:
    """Load a PEM certificate chain and private key.

    Raises:
        TransportStartupError: If either file cannot be read
    """
    try:
        certificate_chain = Path(cert_file).read_bytes()
        private_key = Path(key_file).read_bytes()
    except OSError as e:
        raise TransportStartupError(f"cannot load TLS material: {e}") from e
    return grpc.ssl_server_credentials([(private_key, certificate_chain)])


class PostGrpcServer:
    """gRPC server hosting a PostServicer."""

    def __init__(
        self,
        servicer: PostServicer,
        host: str = "0.0.0.0",
        port: int = 50051,
        max_workers: int = 10,
        tls: TLSConfig | None = None,
        interceptors: Sequence[grpc.ServerInterceptor] = (),
    ) -> None:
        """Create the server and bind its port.

        Args:
            servicer: Handlers to register
            host: Interface to listen on
            port: Port to listen on, 0 for an ephemeral port
            max_workers: Size of the handler thread pool
            tls: Certificate and key paths; insecure when None or unset
            interceptors: Server interceptors, e.g. tracing

        Raises:
            TransportStartupError: If credentials cannot be loaded or the
                port cannot be bound
        """
        self._server = grpc.server(
            futures.ThreadPoolExecutor(max_workers=max_workers),
            interceptors=list(interceptors),
        )
        self._server.add_generic_rpc_handlers((servicer.generic_handler(),))
        self._secure = tls is not None and tls.enabled

        address = f"{host}:{port}"
        try:
            if self._secure:
                credentials = load_server_credentials(tls.cert_file, tls.key_file)
                bound = self._server.add_secure_port(address, credentials)
            else:
                bound = self._server.add_insecure_port(address)
        except RuntimeError as e:
            raise TransportStartupError(f"failed to listen on {address}: {e}") from e
        if bound == 0:
            raise TransportStartupError(f"failed to listen on {address}")

        self._host = host
        self._port = bound

    @property
    def port(self) -> int:
        """The bound port (resolved when 0 was requested)."""
        return self._port

    @property
    def secure(self) -> bool:
        return self._secure

    def start(self) -> None:
        self._server.start()
        logger.info(
            "grpc_server_started",
            host=self._host,
            port=self._port,
            tls=self._secure,
        )

    def stop(self, grace: float | None = None) -> None:
        """Stop accepting calls and wait up to ``grace`` seconds for in-flight ones."""
        self._server.stop(grace).wait()
        logger.info("grpc_server_stopped", port=self._port)

    def wait_for_termination(self, timeout: float | None = None) -> bool:
        return self._server.wait_for_termination(timeout)

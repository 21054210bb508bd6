"""REST API adapter for the post service.

This module provides a FastAPI-based HTTP gateway over the same
PostServiceAPI the gRPC adapter serves. Bodies use the same camelCase
messages as the RPC surface.

Endpoints:
    GET    /health                 - Health check
    GET    /posts                  - List posts (categoryUid, pageSize, pageNumber)
    POST   /posts                  - Create a post
    GET    /posts/{uid}            - Get a post
    PATCH  /posts/{uid}            - Update title and/or URL
    DELETE /posts/{uid}            - Delete a post
    GET    /posts/{uid}/exists     - Check a post exists
    GET    /posts/{uid}/owner      - Get a post's owner
    GET    /categories             - List categories (pageSize, pageNumber)
    POST   /categories             - Create a category

Usage:
    app = create_app(service)
    # Run with uvicorn: uvicorn app:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from typing import TypeVar

from fastapi import FastAPI, HTTPException, Query, Response
from pydantic import BaseModel, Field

from post_service import __version__
from post_service.adapters.inbound.messages import (
    CheckExistsResponse,
    CreateCategoryRequest,
    CreatePostRequest,
    GetOwnerResponse,
    ListCategoriesResponse,
    ListPostsResponse,
    Message,
    SingleCategory,
    SinglePost,
)
from post_service.domain.value_objects import ErrorKind, Result
from post_service.ports.inbound import PostServiceAPI

T = TypeVar("T")

HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
    ErrorKind.UNAUTHENTICATED: 401,
}


class UpdatePostBody(Message):
    """Request body for PATCH /posts/{uid}."""

    title: str = ""
    url: str = ""


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


def _unwrap(result: Result[T]) -> T:
    if result.error is not None:
        raise HTTPException(status_code=HTTP_STATUS[result.error.kind], detail=result.error.message)
    return result.value  # type: ignore[return-value]


def create_app(service: PostServiceAPI) -> FastAPI:
    """Create a FastAPI application for the post service.

    Args:
        service: The post service to expose.

    Returns:
        A configured FastAPI application.
    """
    app = FastAPI(
        title="Post Service API",
        description="REST gateway for posts and categories",
        version=__version__,
    )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @app.get("/posts", response_model=ListPostsResponse, tags=["Posts"])
    def list_posts(
        category_uid: str = Query("", alias="categoryUid"),
        page_size: int = Query(0, alias="pageSize"),
        page_number: int = Query(0, alias="pageNumber"),
    ) -> ListPostsResponse:
        """List posts, newest first."""
        page = _unwrap(service.list_posts(category_uid, page_size, page_number))
        return ListPostsResponse(
            posts=[SinglePost.from_entity(p) for p in page.items],
            page_size=page.page_size,
            page_number=page.page_number,
        )

    @app.post("/posts", response_model=SinglePost, status_code=201, tags=["Posts"])
    def create_post(request: CreatePostRequest) -> SinglePost:
        """Create a post."""
        post = _unwrap(
            service.create_post(request.title, request.url, request.user_uid, request.category_uid)
        )
        return SinglePost.from_entity(post)

    @app.get("/posts/{uid}", response_model=SinglePost, tags=["Posts"])
    def get_post(uid: str) -> SinglePost:
        """Get a single post."""
        return SinglePost.from_entity(_unwrap(service.get_post(uid)))

    @app.patch("/posts/{uid}", status_code=204, tags=["Posts"])
    def update_post(uid: str, body: UpdatePostBody) -> Response:
        """Update a post's title and/or URL; empty fields are left unchanged."""
        _unwrap(service.update_post(uid, body.title, body.url))
        return Response(status_code=204)

    @app.delete("/posts/{uid}", status_code=204, tags=["Posts"])
    def delete_post(uid: str) -> Response:
        """Delete a post."""
        _unwrap(service.delete_post(uid))
        return Response(status_code=204)

    @app.get("/posts/{uid}/exists", response_model=CheckExistsResponse, tags=["Posts"])
    def check_post_exists(uid: str) -> CheckExistsResponse:
        return CheckExistsResponse(exists=_unwrap(service.check_post_exists(uid)))

    @app.get("/posts/{uid}/owner", response_model=GetOwnerResponse, tags=["Posts"])
    def get_post_owner(uid: str) -> GetOwnerResponse:
        return GetOwnerResponse(owner_uid=_unwrap(service.get_post_owner(uid)))

    @app.get("/categories", response_model=ListCategoriesResponse, tags=["Categories"])
    def list_categories(
        page_size: int = Query(0, alias="pageSize"),
        page_number: int = Query(0, alias="pageNumber"),
    ) -> ListCategoriesResponse:
        """List categories."""
        page = _unwrap(service.list_categories(page_size, page_number))
        return ListCategoriesResponse(
            categories=[SingleCategory.from_entity(c) for c in page.items],
            page_size=page.page_size,
            page_number=page.page_number,
        )

    @app.post("/categories", response_model=SingleCategory, status_code=201, tags=["Categories"])
    def create_category(request: CreateCategoryRequest) -> SingleCategory:
        """Create a category."""
        category = _unwrap(service.create_category(request.name, request.user_uid))
        return SingleCategory.from_entity(category)

    return app


def run_server(
    service: PostServiceAPI,
    host: str = "0.0.0.0",
    port: int = 8080,
) -> None:
    """Run the REST gateway (blocking).

    Args:
        service: The post service.
        host: Host to bind to.
        port: Port to bind to.
    """
    import uvicorn

    app = create_app(service)
    uvicorn.run(app, host=host, port=port, log_config=None)

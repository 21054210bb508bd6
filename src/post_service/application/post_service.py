"""Post service: validation, paging policy and outcome mapping.

Each operation follows the same sequence:

    1. Check required text fields (InvalidArgument)
    2. Parse identifiers (InvalidArgument)
    3. Call the repository
    4. Map the outcome: value, NotFound, or Internal

Steps 1 and 2 never touch storage. Repository exceptions are caught here and
nowhere else, so every failure reaching a transport is one of
INVALID_ARGUMENT, NOT_FOUND or INTERNAL.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, TypeVar

from post_service.domain.entities import Category, Post
from post_service.domain.value_objects import (
    CategoryId,
    ErrorKind,
    InvalidIdentifierError,
    Result,
    parse_uid,
)
from post_service.ports.inbound import Page
from post_service.ports.outbound import PostNotFoundError, PostRepositoryPort

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10

MSG_NO_POST_TITLE = "post title is required"
MSG_NO_CATEGORY_NAME = "category name is required"
MSG_INVALID_UUID = "invalid UUID"
MSG_INVALID_PAGE = "page size and page number must not be negative"


class PostService:
    """Stateless implementation of PostServiceAPI over a repository."""

    def __init__(
        self,
        repository: PostRepositoryPort,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Storage for posts and categories.
            default_page_size: Page size used when a request asks for 0.
        """
        if default_page_size <= 0:
            raise ValueError(f"default_page_size must be positive, got {default_page_size}")
        self._repository = repository
        self._default_page_size = default_page_size

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def list_posts(
        self, category_id: str = "", page_size: int = 0, page_number: int = 0
    ) -> Result[Page[Post]]:
        paging = self._resolve_paging(page_size, page_number)
        if paging is None:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_PAGE)
        size, number = paging

        category_uid: CategoryId | None = None
        if category_id:
            try:
                category_uid = CategoryId(parse_uid(category_id))
            except InvalidIdentifierError:
                return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_UUID)

        return self._call(
            "list_posts",
            lambda: Page(
                items=self._repository.list_posts(category_uid, size, number),
                page_size=size,
                page_number=number,
            ),
        )

    def get_post(self, post_id: str) -> Result[Post]:
        uid = _parse_or_none(post_id)
        if uid is None:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_UUID)
        return self._call("get_post", lambda: self._repository.get_post(uid))

    def create_post(
        self, title: str, url: str, owner_id: str, category_id: str = ""
    ) -> Result[Post]:
        if not title:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_NO_POST_TITLE)

        owner_uid = _parse_or_none(owner_id)
        if owner_uid is None:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_UUID)

        category_uid: uuid.UUID | None = None
        if category_id:
            category_uid = _parse_or_none(category_id)
            if category_uid is None:
                return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_UUID)

        result = self._call(
            "create_post",
            lambda: self._repository.create_post(title, url or "", owner_uid, category_uid),
        )
        if result.ok:
            logger.info(f"Post {result.value.uid} created by {owner_uid}")
        return result

    def update_post(self, post_id: str, title: str = "", url: str = "") -> Result[None]:
        uid = _parse_or_none(post_id)
        if uid is None:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_UUID)
        return self._call(
            "update_post", lambda: self._repository.update_post(uid, title or "", url or "")
        )

    def delete_post(self, post_id: str) -> Result[None]:
        uid = _parse_or_none(post_id)
        if uid is None:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_UUID)
        result = self._call("delete_post", lambda: self._repository.delete_post(uid))
        if result.ok:
            logger.info(f"Post {uid} deleted")
        return result

    def check_post_exists(self, post_id: str) -> Result[bool]:
        uid = _parse_or_none(post_id)
        if uid is None:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_UUID)
        return self._call("check_post_exists", lambda: self._repository.check_post_exists(uid))

    def get_post_owner(self, post_id: str) -> Result[str]:
        uid = _parse_or_none(post_id)
        if uid is None:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_UUID)
        return self._call("get_post_owner", lambda: self._repository.get_post_owner(uid))

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self, page_size: int = 0, page_number: int = 0) -> Result[Page[Category]]:
        paging = self._resolve_paging(page_size, page_number)
        if paging is None:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_PAGE)
        size, number = paging

        return self._call(
            "list_categories",
            lambda: Page(
                items=self._repository.list_categories(size, number),
                page_size=size,
                page_number=number,
            ),
        )

    def create_category(self, name: str, owner_id: str) -> Result[Category]:
        if not name:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_NO_CATEGORY_NAME)

        owner_uid = _parse_or_none(owner_id)
        if owner_uid is None:
            return Result.failure(ErrorKind.INVALID_ARGUMENT, MSG_INVALID_UUID)

        result = self._call(
            "create_category", lambda: self._repository.create_category(name, owner_uid)
        )
        if result.ok:
            logger.info(f"Category {result.value.uid} ({name!r}) created by {owner_uid}")
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_paging(self, page_size: int, page_number: int) -> tuple[int, int] | None:
        """Apply the default page size; None if either value is negative."""
        page_size = page_size or 0
        page_number = page_number or 0
        if page_size < 0 or page_number < 0:
            return None
        if page_size == 0:
            page_size = self._default_page_size
        return page_size, page_number

    def _call(self, operation: str, call: Callable[[], T]) -> Result[T]:
        """Run a repository call and map its outcome."""
        try:
            return Result.success(call())
        except PostNotFoundError as e:
            return Result.failure(ErrorKind.NOT_FOUND, str(e))
        except Exception as e:
            logger.exception(f"{operation} failed: {e}")
            return Result.failure(ErrorKind.INTERNAL, str(e))


def _parse_or_none(value: str) -> uuid.UUID | None:
    try:
        return parse_uid(value)
    except InvalidIdentifierError:
        return None

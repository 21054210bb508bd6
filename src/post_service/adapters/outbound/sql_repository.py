"""Relational post repository adapter.

Implements PostRepositoryPort with SQLAlchemy Core. Production deployments
point it at PostgreSQL; tests run it against in-memory SQLite.

Tables:
    posts(uid, user_uid, category_uid, title, url, created_at, modified_at)
    categories(uid, user_uid, name)

Each operation runs in its own transaction (``engine.begin()``) on a pooled
connection. Driver exceptions are re-raised as RepositoryError.

Usage:
    engine = create_engine_from_url("postgresql://user:pass@db/posts")
    repo = SQLPostRepository(engine)
    repo.create_schema()  # development and tests only
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Generator

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    MetaData,
    Table,
    Text,
    Uuid,
    case,
    create_engine,
    delete,
    exists,
    func,
    insert,
    literal,
    select,
    update,
)
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from post_service.domain.entities import Category, Post
from post_service.domain.value_objects import CategoryId, PostId, UserId
from post_service.ports.outbound import (
    CategoryNotCreatedError,
    PostNotCreatedError,
    PostNotFoundError,
    RepositoryError,
)


metadata = MetaData()

posts_table = Table(
    "posts",
    metadata,
    Column("uid", Uuid, primary_key=True),
    Column("user_uid", Uuid, nullable=False),
    Column("category_uid", Uuid, nullable=True),
    Column("title", Text, nullable=False),
    Column("url", Text, nullable=False, default=""),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("modified_at", DateTime(timezone=True), nullable=False),
    Index("ix_posts_category_created_at", "category_uid", "created_at"),
)

categories_table = Table(
    "categories",
    metadata,
    Column("uid", Uuid, primary_key=True),
    Column("user_uid", Uuid, nullable=False),
    Column("name", Text, nullable=False),
)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_database_url(url: str) -> str:
    """Rewrite libpq-style ``postgres://`` URLs to SQLAlchemy's dialect name."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def create_engine_from_url(url: str, pool_size: int = 5, echo: bool = False) -> Engine:
    """Create a pooled engine for the given database URL.

    In-memory SQLite shares a single connection across threads so every
    worker sees the same database.
    """
    url = normalize_database_url(url)
    kwargs: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_size"] = pool_size
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored is UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _row_to_post(row: Row) -> Post:
    return Post(
        uid=PostId(row.uid),
        user_uid=UserId(row.user_uid),
        category_uid=CategoryId(row.category_uid) if row.category_uid is not None else None,
        title=row.title,
        url=row.url,
        created_at=_as_utc(row.created_at),
        modified_at=_as_utc(row.modified_at),
    )


def _row_to_category(row: Row) -> Category:
    return Category(
        uid=CategoryId(row.uid),
        user_uid=UserId(row.user_uid),
        name=row.name,
    )


class SQLPostRepository:
    """SQLAlchemy implementation of PostRepositoryPort."""

    def __init__(
        self,
        engine: Engine,
        clock: Callable[[], datetime] = utcnow,
        uid_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ) -> None:
        """Initialize the repository.

        Args:
            engine: Pooled SQLAlchemy engine
            clock: Source of creation and modification times
            uid_factory: Source of new UIDs
        """
        self._engine = engine
        self._clock = clock
        self._uid_factory = uid_factory

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_schema(self) -> None:
        """Create the tables if they do not exist."""
        with self._errors():
            metadata.create_all(self._engine)

    def dispose(self) -> None:
        """Close all pooled connections."""
        self._engine.dispose()

    @contextmanager
    def _errors(self) -> Generator[None, None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            raise RepositoryError(str(e)) from e

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def list_posts(
        self,
        category_uid: uuid.UUID | None,
        page_size: int,
        page_number: int,
    ) -> list[Post]:
        query = select(posts_table)
        if category_uid is not None:
            query = query.where(posts_table.c.category_uid == category_uid)
        query = (
            query.order_by(posts_table.c.created_at.desc(), posts_table.c.uid.desc())
            .limit(page_size)
            .offset(page_number * page_size)
        )
        with self._errors(), self._engine.connect() as conn:
            return [_row_to_post(row) for row in conn.execute(query)]

    def get_post(self, uid: uuid.UUID) -> Post:
        query = select(posts_table).where(posts_table.c.uid == uid)
        with self._errors(), self._engine.connect() as conn:
            row = conn.execute(query).first()
        if row is None:
            raise PostNotFoundError(uid)
        return _row_to_post(row)

    def create_post(
        self,
        title: str,
        url: str,
        user_uid: uuid.UUID,
        category_uid: uuid.UUID | None = None,
    ) -> Post:
        now = self._clock()
        post = Post(
            uid=PostId(self._uid_factory()),
            user_uid=UserId(user_uid),
            category_uid=CategoryId(category_uid) if category_uid is not None else None,
            title=title,
            url=url,
            created_at=now,
            modified_at=now,
        )
        stmt = insert(posts_table).values(
            uid=post.uid,
            user_uid=post.user_uid,
            category_uid=post.category_uid,
            title=post.title,
            url=post.url,
            created_at=post.created_at,
            modified_at=post.modified_at,
        )
        with self._errors(), self._engine.begin() as conn:
            rowcount = conn.execute(stmt).rowcount
        if rowcount == 0:
            raise PostNotCreatedError()
        return post

    def update_post(self, uid: uuid.UUID, title: str, url: str) -> None:
        now = literal(self._clock(), posts_table.c.modified_at.type)
        # Empty strings keep the stored value: COALESCE(NULLIF(:v, ''), col)
        stmt = (
            update(posts_table)
            .where(posts_table.c.uid == uid)
            .values(
                title=func.coalesce(func.nullif(title, ""), posts_table.c.title),
                url=func.coalesce(func.nullif(url, ""), posts_table.c.url),
                # never earlier than created_at, even under clock skew
                modified_at=case(
                    (posts_table.c.created_at > now, posts_table.c.created_at),
                    else_=now,
                ),
            )
        )
        with self._errors(), self._engine.begin() as conn:
            rowcount = conn.execute(stmt).rowcount
        if rowcount == 0:
            raise PostNotFoundError(uid)

    def delete_post(self, uid: uuid.UUID) -> None:
        stmt = delete(posts_table).where(posts_table.c.uid == uid)
        with self._errors(), self._engine.begin() as conn:
            rowcount = conn.execute(stmt).rowcount
        if rowcount == 0:
            raise PostNotFoundError(uid)

    def check_post_exists(self, uid: uuid.UUID) -> bool:
        query = select(exists().where(posts_table.c.uid == uid))
        with self._errors(), self._engine.connect() as conn:
            return bool(conn.execute(query).scalar())

    def get_post_owner(self, uid: uuid.UUID) -> str:
        query = select(posts_table.c.user_uid).where(posts_table.c.uid == uid)
        with self._errors(), self._engine.connect() as conn:
            owner = conn.execute(query).scalar_one_or_none()
        if owner is None:
            raise PostNotFoundError(uid)
        return str(owner)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self, page_size: int, page_number: int) -> list[Category]:
        query = (
            select(categories_table)
            .order_by(categories_table.c.name, categories_table.c.uid)
            .limit(page_size)
            .offset(page_number * page_size)
        )
        with self._errors(), self._engine.connect() as conn:
            return [_row_to_category(row) for row in conn.execute(query)]

    def create_category(self, name: str, user_uid: uuid.UUID) -> Category:
        category = Category(
            uid=CategoryId(self._uid_factory()),
            user_uid=UserId(user_uid),
            name=name,
        )
        stmt = insert(categories_table).values(
            uid=category.uid,
            user_uid=category.user_uid,
            name=category.name,
        )
        with self._errors(), self._engine.begin() as conn:
            rowcount = conn.execute(stmt).rowcount
        if rowcount == 0:
            raise CategoryNotCreatedError()
        return category

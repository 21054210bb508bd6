"""Repository tests: the shared port contract plus in-memory specifics."""

from __future__ import annotations

import threading
import uuid
from datetime import timedelta

import pytest

from post_service.adapters.outbound.memory_repository import InMemoryPostRepository
from post_service.application.post_service import PostService
from post_service.ports.outbound import PostNotFoundError, PostRepositoryPort

OWNER = uuid.uuid4()


def seed(repository, count: int, category_uid: uuid.UUID | None = None) -> list:
    """Create ``count`` posts titled "post 1".."post N" in creation order."""
    return [
        repository.create_post(f"post {i}", f"example.com/{i}", OWNER, category_uid)
        for i in range(1, count + 1)
    ]


@pytest.mark.unit
class TestRepositoryContract:
    """Behaviour shared by all repositories."""

    def test_implements_port(self, repository) -> None:
        assert isinstance(repository, PostRepositoryPort)

    def test_create_assigns_uid_and_timestamps(self, repository) -> None:
        post = repository.create_post("First post", "google.com", OWNER)
        assert isinstance(post.uid, uuid.UUID)
        assert post.user_uid == OWNER
        assert post.created_at == post.modified_at
        assert post.created_at.tzinfo is not None

    def test_get_round_trip(self, repository) -> None:
        category = uuid.uuid4()
        created = repository.create_post("First post", "google.com", OWNER, category)
        assert repository.get_post(created.uid) == created

    def test_get_missing(self, repository) -> None:
        with pytest.raises(PostNotFoundError):
            repository.get_post(uuid.uuid4())

    def test_list_newest_first(self, repository) -> None:
        seed(repository, 4)
        titles = [p.title for p in repository.list_posts(None, 10, 0)]
        assert titles == ["post 4", "post 3", "post 2", "post 1"]

    def test_pagination_skips_whole_pages(self, repository) -> None:
        seed(repository, 8)
        page = repository.list_posts(None, 3, 1)
        assert [p.title for p in page] == ["post 5", "post 4", "post 3"]

    def test_pagination_first_and_last_pages(self, repository) -> None:
        seed(repository, 8)
        assert [p.title for p in repository.list_posts(None, 3, 0)] == ["post 8", "post 7", "post 6"]
        assert [p.title for p in repository.list_posts(None, 3, 2)] == ["post 2", "post 1"]
        assert repository.list_posts(None, 3, 3) == []

    def test_same_timestamp_pages_are_disjoint(self, repository, clock) -> None:
        clock.step = timedelta(0)
        created = seed(repository, 5)
        pages = [repository.list_posts(None, 2, n) for n in range(3)]
        uids = [p.uid for page in pages for p in page]
        assert sorted(uids) == sorted(p.uid for p in created)
        assert [str(u) for u in uids] == sorted((str(p.uid) for p in created), reverse=True)

    def test_list_filtered_by_category(self, repository) -> None:
        news, art = uuid.uuid4(), uuid.uuid4()
        seed(repository, 2, news)
        seed(repository, 3, art)
        assert len(repository.list_posts(news, 10, 0)) == 2
        assert len(repository.list_posts(art, 10, 0)) == 3
        assert len(repository.list_posts(None, 10, 0)) == 5
        assert all(p.category_uid == news for p in repository.list_posts(news, 10, 0))

    def test_update_empty_fields_only_touches_modified_at(self, repository) -> None:
        post = repository.create_post("First post", "google.com", OWNER)
        repository.update_post(post.uid, "", "")
        updated = repository.get_post(post.uid)
        assert updated.title == post.title
        assert updated.url == post.url
        assert updated.created_at == post.created_at
        assert updated.modified_at > post.modified_at

    def test_update_title(self, repository) -> None:
        post = repository.create_post("First post", "google.com", OWNER)
        repository.update_post(post.uid, "Renamed", "")
        updated = repository.get_post(post.uid)
        assert updated.title == "Renamed"
        assert updated.url == "google.com"
        assert updated.modified_at > post.modified_at

    def test_update_with_clock_behind_created_at(self, repository, clock) -> None:
        clock.step = timedelta(milliseconds=-5)
        post = repository.create_post("First post", "google.com", OWNER)
        repository.update_post(post.uid, "Renamed", "")
        updated = repository.get_post(post.uid)
        assert updated.title == "Renamed"
        assert updated.modified_at == post.created_at
        assert [p.uid for p in repository.list_posts(None, 10, 0)] == [post.uid]

    def test_service_reads_post_updated_under_clock_skew(self, repository, clock) -> None:
        service = PostService(repository)
        clock.step = timedelta(milliseconds=-5)
        post = service.create_post("First post", "google.com", str(OWNER)).unwrap()
        assert service.update_post(str(post.uid), "Renamed", "").ok
        assert service.get_post(str(post.uid)).unwrap().title == "Renamed"
        assert service.list_posts("", 10, 0).ok

    def test_update_url(self, repository) -> None:
        post = repository.create_post("First post", "", OWNER)
        repository.update_post(post.uid, "", "yandex.ru")
        assert repository.get_post(post.uid).url == "yandex.ru"

    def test_update_missing(self, repository) -> None:
        with pytest.raises(PostNotFoundError):
            repository.update_post(uuid.uuid4(), "title", "")

    def test_delete(self, repository) -> None:
        post = repository.create_post("First post", "", OWNER)
        repository.delete_post(post.uid)
        assert not repository.check_post_exists(post.uid)
        with pytest.raises(PostNotFoundError):
            repository.delete_post(post.uid)

    def test_check_exists(self, repository) -> None:
        post = repository.create_post("First post", "", OWNER)
        assert repository.check_post_exists(post.uid) is True
        assert repository.check_post_exists(uuid.uuid4()) is False

    def test_get_owner(self, repository) -> None:
        post = repository.create_post("First post", "", OWNER)
        assert repository.get_post_owner(post.uid) == str(OWNER)
        with pytest.raises(PostNotFoundError):
            repository.get_post_owner(uuid.uuid4())

    def test_categories(self, repository) -> None:
        created = [repository.create_category(name, OWNER) for name in ("tech", "art", "music")]
        assert len({c.uid for c in created}) == 3
        listed = repository.list_categories(10, 0)
        assert [c.name for c in listed] == ["art", "music", "tech"]
        assert all(c.user_uid == OWNER for c in listed)
        assert [c.name for c in repository.list_categories(2, 1)] == ["tech"]


@pytest.mark.unit
class TestInMemoryRepository:
    """Behaviour specific to the in-memory repository."""

    def test_len_counts_posts(self, memory_repository: InMemoryPostRepository) -> None:
        seed(memory_repository, 3)
        assert len(memory_repository) == 3
        memory_repository.clear()
        assert len(memory_repository) == 0

    def test_len_waits_for_lock(self, memory_repository: InMemoryPostRepository) -> None:
        seed(memory_repository, 2)
        sizes: list[int] = []
        with memory_repository._lock:
            reader = threading.Thread(target=lambda: sizes.append(len(memory_repository)))
            reader.start()
            reader.join(timeout=0.1)
            assert reader.is_alive()
        reader.join(timeout=5)
        assert sizes == [2]

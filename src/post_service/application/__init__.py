"""Application layer - use cases exposed through the inbound port."""

from post_service.application.post_service import DEFAULT_PAGE_SIZE, PostService

__all__ = ["DEFAULT_PAGE_SIZE", "PostService"]

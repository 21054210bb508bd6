"""Inbound ports - the API the post service offers to transport adapters."""

from post_service.ports.inbound.post_service import Page, PostServiceAPI

__all__ = ["Page", "PostServiceAPI"]

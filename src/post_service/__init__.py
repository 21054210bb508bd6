"""
Post Service - user-owned posts and categories over gRPC

A small CRUD service: posts grouped into categories, each owned by a user,
stored behind a repository port and served through gRPC (with an optional
REST gateway).
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"

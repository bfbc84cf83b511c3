"""Saved and applied job actions."""

from .relation_service import RelationService, get_relation_service

__all__ = [
    "RelationService",
    "get_relation_service",
]

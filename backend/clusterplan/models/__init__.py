"""Models layer - SQLAlchemy ORM models.

Models define the database schema and relationships.
All models inherit from the Base class defined in core.database.
"""

from clusterplan.core.database import Base
from clusterplan.models.content_cluster import (
    ClusterContentIdea,
    ClusterStatus,
    ContentCluster,
    ContentIdeaStatus,
    ContentType,
    Level,
)
from clusterplan.models.organization import AppUser, AuthSession, Organization

__all__ = [
    "AppUser",
    "AuthSession",
    "Base",
    "ClusterContentIdea",
    "ClusterStatus",
    "ContentCluster",
    "ContentIdeaStatus",
    "ContentType",
    "Level",
    "Organization",
]

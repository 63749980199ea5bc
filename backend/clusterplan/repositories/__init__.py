"""Repositories layer - Data access and persistence.

Repositories handle all database operations using SQLAlchemy.
They abstract the database implementation from the service layer.
"""

from clusterplan.repositories.content_cluster import (
    AppUserRepository,
    ContentClusterRepository,
)

__all__ = ["AppUserRepository", "ContentClusterRepository"]

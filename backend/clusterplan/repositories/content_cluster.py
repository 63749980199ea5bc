"""ContentClusterRepository and AppUserRepository.

Handles database operations for content clusters, their content ideas and
the user -> organization lookup used to scope them.
Follows the layered architecture pattern: API -> Service -> Repository -> Database.

Repositories flush but never commit; the caller owns the transaction.

ERROR LOGGING REQUIREMENTS:
- Log method entry/exit at DEBUG level with parameters (sanitized)
- Include entity IDs (cluster_id, org_id) in all logs
- Add timing logs for operations >1 second
"""

import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clusterplan.core.logging import db_logger, get_logger
from clusterplan.models.content_cluster import ClusterContentIdea, ContentCluster
from clusterplan.models.organization import AppUser

logger = get_logger(__name__)


class AppUserRepository:
    """Repository for application user lookups."""

    TABLE_NAME = "app_users"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_org_id(self, user_id: str) -> str | None:
        """Return the organization id of a user, or None if the user is unknown."""
        logger.debug("Looking up user organization", extra={"user_id": user_id})
        stmt = select(AppUser.org_id).where(AppUser.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class ContentClusterRepository:
    """Repository for ContentCluster and ClusterContentIdea operations.

    All methods accept an AsyncSession and raise SQLAlchemyError on database
    errors; rollback is left to the caller.
    """

    TABLE_NAME = "content_clusters"
    IDEAS_TABLE_NAME = "cluster_content_ideas"
    SLOW_OPERATION_THRESHOLD_MS = 1000  # 1 second

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session for database operations
        """
        self.session = session
        logger.debug("ContentClusterRepository initialized")

    def _log_if_slow(self, query: str, start_time: float, table: str) -> None:
        duration_ms = (time.monotonic() - start_time) * 1000
        if duration_ms > self.SLOW_OPERATION_THRESHOLD_MS:
            db_logger.slow_query(query=query, duration_ms=duration_ms, table=table)

    async def probe_cluster_table(self) -> None:
        """Read one id from content_clusters to confirm the table is reachable."""
        await self.session.execute(select(ContentCluster.id).limit(1))

    async def probe_ideas_table(self) -> None:
        """Read one id from cluster_content_ideas to confirm the table is reachable."""
        await self.session.execute(select(ClusterContentIdea.id).limit(1))

    async def name_exists(self, org_id: str, cluster_name: str) -> bool:
        """Check whether the organization already has a cluster with this name."""
        stmt = (
            select(ContentCluster.id)
            .where(
                ContentCluster.org_id == org_id,
                ContentCluster.cluster_name == cluster_name,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def add_cluster(self, cluster: ContentCluster) -> ContentCluster:
        """Insert a cluster and flush so its id is assigned."""
        start_time = time.monotonic()
        self.session.add(cluster)
        await self.session.flush()
        self._log_if_slow(f"INSERT INTO {self.TABLE_NAME}", start_time, self.TABLE_NAME)

        logger.debug(
            "Content cluster inserted",
            extra={
                "cluster_id": cluster.id,
                "org_id": cluster.org_id,
                "cluster_name": cluster.cluster_name,
            },
        )
        return cluster

    async def add_ideas(self, ideas: list[ClusterContentIdea]) -> None:
        """Insert content ideas and flush."""
        if not ideas:
            return
        start_time = time.monotonic()
        self.session.add_all(ideas)
        await self.session.flush()
        self._log_if_slow(
            f"INSERT INTO {self.IDEAS_TABLE_NAME}", start_time, self.IDEAS_TABLE_NAME
        )

        logger.debug(
            "Content ideas inserted",
            extra={"cluster_id": ideas[0].cluster_id, "idea_count": len(ideas)},
        )

    async def get_by_id(
        self, cluster_id: str, org_id: str | None = None
    ) -> ContentCluster | None:
        """Get a cluster by id, optionally restricted to one organization."""
        stmt = select(ContentCluster).where(ContentCluster.id == cluster_id)
        if org_id is not None:
            stmt = stmt.where(ContentCluster.org_id == org_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_user(
        self, user_id: str, org_id: str | None = None
    ) -> list[ContentCluster]:
        """List a user's clusters, newest first."""
        start_time = time.monotonic()
        stmt = select(ContentCluster).where(ContentCluster.user_id == user_id)
        if org_id is not None:
            stmt = stmt.where(ContentCluster.org_id == org_id)
        stmt = stmt.order_by(ContentCluster.created_at.desc())

        result = await self.session.execute(stmt)
        clusters = list(result.scalars().all())
        self._log_if_slow(f"SELECT FROM {self.TABLE_NAME}", start_time, self.TABLE_NAME)

        logger.debug(
            "Listed content clusters",
            extra={"user_id": user_id, "org_id": org_id, "count": len(clusters)},
        )
        return clusters

    async def list_ideas(self, cluster_id: str) -> list[ClusterContentIdea]:
        """List a cluster's ideas by priority (highest first), then sequence."""
        start_time = time.monotonic()
        stmt = (
            select(ClusterContentIdea)
            .where(ClusterContentIdea.cluster_id == cluster_id)
            .order_by(
                ClusterContentIdea.priority.desc(),
                ClusterContentIdea.keyword_sequence.asc(),
                ClusterContentIdea.created_at.asc(),
            )
        )
        result = await self.session.execute(stmt)
        ideas = list(result.scalars().all())
        self._log_if_slow(
            f"SELECT FROM {self.IDEAS_TABLE_NAME}", start_time, self.IDEAS_TABLE_NAME
        )

        logger.debug(
            "Listed content ideas",
            extra={"cluster_id": cluster_id, "count": len(ideas)},
        )
        return ideas

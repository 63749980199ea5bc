"""ClusterPersistenceGateway: persist enhanced clusters and their content ideas.

Writes the in-memory cluster -> article graph as two ordered inserts
(content_clusters, then cluster_content_ideas keyed by the new cluster id)
for one authenticated user and organization.

Guarantees:
- Fails closed: every failure is returned as SaveResult(success=False)
  carrying a PersistenceError; nothing is raised past the gateway.
- Input and caller checks run before any database access.
- All rows are written in one transaction. Any failure rolls back, so a
  cluster is never left without its ideas.
- Cluster names stay unique per organization: a colliding name gets a
  "(YYYY-MM-DDTHH-MM-SS)" suffix, plus "-N" if that is taken too.
- Cluster content counts are recomputed from the ideas actually inserted.

ERROR LOGGING REQUIREMENTS:
- Log method entry/exit at DEBUG level with parameters (sanitized)
- Log all exceptions with full stack trace and context
- Include entity IDs (user_id, org_id, cluster_id) in all logs
- Log rejected requests at WARNING and failed writes at ERROR
- Add timing logs for operations >1 second
"""

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from clusterplan.core.auth import UserInfo
from clusterplan.core.database import transaction
from clusterplan.core.logging import get_logger, planning_logger
from clusterplan.models.content_cluster import (
    ClusterContentIdea,
    ContentCluster,
    ContentType,
)
from clusterplan.repositories.content_cluster import (
    AppUserRepository,
    ContentClusterRepository,
)
from clusterplan.schemas.content_cluster import (
    EnhancedContentCluster,
    HumanReadableArticle,
    measured_or_none,
)

logger = get_logger(__name__)

# Threshold for logging slow operations (in milliseconds)
SLOW_OPERATION_THRESHOLD_MS = 1000

RENAME_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"


class PersistenceErrorCode(str, Enum):
    """Why a save was refused or failed."""

    INVALID_INPUT = "invalid_input"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    ORGANIZATION_NOT_FOUND = "organization_not_found"
    TABLE_ACCESS = "table_access"
    INSERT_FAILED = "insert_failed"


@dataclass(frozen=True)
class PersistenceError:
    """A save failure with a code and a human-readable message.

    Attributes:
        code: Failure category
        message: Non-empty description of what went wrong
    """

    code: PersistenceErrorCode
    message: str

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise ValueError("PersistenceError.message must not be empty")

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code.value, "message": self.message}


@dataclass
class SaveResult:
    """Outcome of save_enhanced_clusters.

    Attributes:
        success: Whether every cluster and idea was written
        cluster_ids: Ids of the inserted clusters, in input order
        error: The failure, when success is False
    """

    success: bool
    cluster_ids: list[str] = field(default_factory=list)
    error: PersistenceError | None = None

    @classmethod
    def ok(cls, cluster_ids: list[str]) -> "SaveResult":
        return cls(success=True, cluster_ids=cluster_ids)

    @classmethod
    def failure(cls, code: PersistenceErrorCode, message: str) -> "SaveResult":
        return cls(success=False, error=PersistenceError(code=code, message=message))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "cluster_ids": self.cluster_ids,
            "error": self.error.to_dict() if self.error else None,
        }


def describe_db_error(error: BaseException, fallback: str) -> str:
    """Most specific message available for a database error, never empty.

    SQLAlchemy wraps driver errors; the driver's message lives on `orig`.
    """
    orig = getattr(error, "orig", None)
    message = str(orig) if orig is not None else str(error)
    message = message.strip()
    return message or fallback


class ClusterPersistenceGateway:
    """Persists generated clusters and ideas for one caller.

    The caller identity is an explicit argument of every write; the clock
    used for rename suffixes is injectable for tests.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.session = session
        self._clock = clock or (lambda: datetime.now(UTC))
        self._clusters = ContentClusterRepository(session)
        self._users = AppUserRepository(session)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_input(
        user_id: str,
        clusters: Sequence[EnhancedContentCluster],
        articles: Sequence[HumanReadableArticle],
    ) -> PersistenceError | None:
        """Check the payload without touching the database."""
        if not user_id or not user_id.strip():
            return PersistenceError(PersistenceErrorCode.INVALID_INPUT, "Invalid user ID")
        if not clusters:
            return PersistenceError(
                PersistenceErrorCode.INVALID_INPUT, "No clusters provided"
            )
        if not articles:
            return PersistenceError(
                PersistenceErrorCode.INVALID_INPUT, "No articles provided"
            )

        keys = [c.key for c in clusters]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            return PersistenceError(
                PersistenceErrorCode.INVALID_INPUT,
                f"Duplicate cluster keys: {', '.join(duplicates)}",
            )

        known = set(keys)
        orphans = sorted({a.cluster_key for a in articles if a.cluster_key not in known})
        if orphans:
            return PersistenceError(
                PersistenceErrorCode.INVALID_INPUT,
                f"Articles reference unknown clusters: {', '.join(orphans)}",
            )
        return None

    @staticmethod
    def authorize(caller: UserInfo | None, user_id: str) -> PersistenceError | None:
        """Check that the caller is authenticated and saving for itself."""
        if caller is None:
            return PersistenceError(
                PersistenceErrorCode.UNAUTHENTICATED, "User not authenticated"
            )
        if caller.id != user_id:
            return PersistenceError(PersistenceErrorCode.FORBIDDEN, "User ID mismatch")
        return None

    # -------------------------------------------------------------------------
    # Naming
    # -------------------------------------------------------------------------

    async def unique_cluster_name(self, org_id: str, cluster_name: str) -> str:
        """Return cluster_name, or a timestamp-suffixed variant if it is taken."""
        if not await self._clusters.name_exists(org_id, cluster_name):
            return cluster_name

        timestamp = self._clock().astimezone(UTC).strftime(RENAME_TIMESTAMP_FORMAT)
        candidate = f"{cluster_name} ({timestamp})"
        counter = 2
        while await self._clusters.name_exists(org_id, candidate):
            candidate = f"{cluster_name} ({timestamp}-{counter})"
            counter += 1

        planning_logger.cluster_renamed(cluster_name, candidate, org_id)
        return candidate

    # -------------------------------------------------------------------------
    # Row building
    # -------------------------------------------------------------------------

    @staticmethod
    def build_ideas(
        articles: Sequence[HumanReadableArticle], org_id: str
    ) -> list[ClusterContentIdea]:
        """Build idea rows for one cluster, numbering repeated keywords from 1."""
        sequences: dict[str, int] = {}
        ideas: list[ClusterContentIdea] = []

        for article in articles:
            sequence = sequences.get(article.target_keyword, 0) + 1
            sequences[article.target_keyword] = sequence

            ideas.append(
                ClusterContentIdea(
                    org_id=org_id,
                    content_type=article.content_type.value,
                    target_keyword=article.target_keyword,
                    keyword_sequence=sequence,
                    title=article.title,
                    subtitle=article.subtitle,
                    meta_description=article.meta_description,
                    url_slug=article.url_slug,
                    status=article.status.value,
                    priority=article.priority,
                    word_count_target=article.estimated_word_count,
                    estimated_reading_time=article.estimated_reading_time,
                    tone=article.tone,
                    outline=article.content_outline.model_dump(mode="json"),
                    seo_insights=article.seo_insights.model_dump(mode="json"),
                    content_gaps=measured_or_none(article.content_gaps),
                    internal_links_planned=[
                        link.model_dump(mode="json")
                        for link in article.internal_linking_opportunities
                    ],
                    external_links_planned=measured_or_none(article.external_resources),
                    search_volume=article.seo_insights.search_volume,
                    keyword_difficulty=article.difficulty_score,
                    estimated_traffic=article.estimated_traffic,
                )
            )
        return ideas

    @staticmethod
    def build_cluster(
        cluster: EnhancedContentCluster,
        cluster_name: str,
        user_id: str,
        org_id: str,
        ideas: Sequence[ClusterContentIdea],
    ) -> ContentCluster:
        """Build a cluster row whose counts match the given idea rows."""

        def count(content_type: ContentType) -> int:
            return sum(1 for idea in ideas if idea.content_type == content_type.value)

        return ContentCluster(
            user_id=user_id,
            org_id=org_id,
            cluster_name=cluster_name,
            pillar_keyword=cluster.pillar_keyword,
            cluster_description=cluster.cluster_description,
            cluster_status=cluster.cluster_status.value,
            authority_score=cluster.authority_score,
            total_keywords=cluster.total_keywords,
            content_count=len(ideas),
            pillar_content_count=count(ContentType.PILLAR),
            supporting_content_count=count(ContentType.SUPPORTING),
            long_tail_content_count=count(ContentType.LONG_TAIL),
            research_data=cluster.research_data.model_dump(mode="json"),
            keyword_clusters=[
                group.model_dump(mode="json") for group in cluster.keyword_clusters
            ],
            estimated_traffic_potential=cluster.estimated_traffic_potential.value,
            content_gap_score=measured_or_none(cluster.content_gap_score),
            competition_level=cluster.competition_level.value,
            target_audience=cluster.target_audience,
            content_strategy=cluster.content_strategy,
        )

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def _reject(
        self, error: PersistenceError, user_id: str | None
    ) -> SaveResult:
        planning_logger.save_rejected(error.code.value, error.message, user_id=user_id)
        return SaveResult(success=False, error=error)

    def _fail(
        self,
        code: PersistenceErrorCode,
        message: str,
        user_id: str,
        org_id: str | None = None,
        table: str | None = None,
    ) -> SaveResult:
        planning_logger.save_failed(
            code.value, message, user_id=user_id, org_id=org_id, table=table
        )
        return SaveResult.failure(code, message)

    async def save_enhanced_clusters(
        self,
        caller: UserInfo | None,
        user_id: str,
        clusters: Sequence[EnhancedContentCluster],
        articles: Sequence[HumanReadableArticle],
    ) -> SaveResult:
        """Persist clusters and their articles in a single transaction.

        Args:
            caller: Authenticated caller, or None when there is no session
            user_id: User the clusters are saved for; must equal caller.id
            clusters: Clusters to insert, in order
            articles: Articles, each linked to a cluster by cluster_key

        Returns:
            SaveResult with cluster ids on success, or a PersistenceError
        """
        start_time = time.monotonic()
        logger.debug(
            "Saving enhanced clusters",
            extra={
                "user_id": user_id,
                "cluster_count": len(clusters),
                "article_count": len(articles),
            },
        )

        error = self.validate_input(user_id, clusters, articles)
        if error is None:
            error = self.authorize(caller, user_id)
        if error is not None:
            return self._reject(error, user_id)

        # Organization lookup
        try:
            org_id = await self._users.get_org_id(user_id)
        except SQLAlchemyError as e:
            await self.session.rollback()
            return self._fail(
                PersistenceErrorCode.ORGANIZATION_NOT_FOUND,
                describe_db_error(e, "User organization lookup failed"),
                user_id=user_id,
                table=AppUserRepository.TABLE_NAME,
            )
        if org_id is None:
            return self._reject(
                PersistenceError(
                    PersistenceErrorCode.ORGANIZATION_NOT_FOUND,
                    "User organization not found",
                ),
                user_id,
            )

        # Table access probes
        for table, probe in (
            (ContentClusterRepository.TABLE_NAME, self._clusters.probe_cluster_table),
            (ContentClusterRepository.IDEAS_TABLE_NAME, self._clusters.probe_ideas_table),
        ):
            try:
                await probe()
            except SQLAlchemyError as e:
                await self.session.rollback()
                detail = describe_db_error(e, "Unknown error")
                return self._fail(
                    PersistenceErrorCode.TABLE_ACCESS,
                    f"Table access failed for {table}: {detail}",
                    user_id=user_id,
                    org_id=org_id,
                    table=table,
                )

        # Inserts
        cluster_ids: list[str] = []
        idea_count = 0
        try:
            async with transaction(self.session, table=ContentClusterRepository.TABLE_NAME):
                for cluster in clusters:
                    cluster_name = await self.unique_cluster_name(
                        org_id, cluster.cluster_name
                    )
                    own_articles = [a for a in articles if a.cluster_key == cluster.key]
                    ideas = self.build_ideas(own_articles, org_id)
                    row = self.build_cluster(cluster, cluster_name, user_id, org_id, ideas)

                    await self._clusters.add_cluster(row)
                    for idea in ideas:
                        idea.cluster_id = row.id
                    await self._clusters.add_ideas(ideas)

                    cluster_ids.append(row.id)
                    idea_count += len(ideas)
        except SQLAlchemyError as e:
            return self._fail(
                PersistenceErrorCode.INSERT_FAILED,
                describe_db_error(e, "Unknown database error"),
                user_id=user_id,
                org_id=org_id,
            )
        except Exception as e:
            logger.error(
                "Unexpected error while saving enhanced clusters",
                extra={
                    "user_id": user_id,
                    "org_id": org_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            await self.session.rollback()
            return self._fail(
                PersistenceErrorCode.INSERT_FAILED,
                str(e).strip() or "Unknown error occurred while saving clusters",
                user_id=user_id,
                org_id=org_id,
            )

        duration_ms = (time.monotonic() - start_time) * 1000
        planning_logger.save_complete(
            user_id=user_id,
            org_id=org_id,
            cluster_count=len(cluster_ids),
            idea_count=idea_count,
            duration_ms=duration_ms,
        )
        if duration_ms > SLOW_OPERATION_THRESHOLD_MS:
            logger.warning(
                "Slow cluster save",
                extra={"user_id": user_id, "duration_ms": round(duration_ms, 2)},
            )

        return SaveResult.ok(cluster_ids)

    async def resolve_org_id(self, user_id: str) -> str | None:
        """Organization of a user, or None when the user has no profile."""
        return await self._users.get_org_id(user_id)

    async def list_user_clusters(
        self, user_id: str, org_id: str | None = None
    ) -> list[ContentCluster]:
        """A user's clusters, newest first."""
        return await self._clusters.list_by_user(user_id, org_id)

    async def get_cluster(
        self, cluster_id: str, org_id: str | None = None
    ) -> ContentCluster | None:
        return await self._clusters.get_by_id(cluster_id, org_id)

    async def list_cluster_ideas(self, cluster_id: str) -> list[ClusterContentIdea]:
        """A cluster's ideas, highest priority first, then by keyword sequence."""
        return await self._clusters.list_ideas(cluster_id)

"""ContentCluster and ClusterContentIdea models for content planning.

ContentCluster represents a planned topic hub built around a pillar keyword:
- cluster_name: Display name, unique per organization
- pillar_keyword: The head term the hub is built around
- cluster_status: Workflow status (planning, in_progress, completed, archived)
- authority_score / estimated_traffic_potential / competition_level: Planning metrics
- research_data / keyword_clusters: JSONB copy of the originating research payload

ClusterContentIdea represents one planned article within a cluster:
- content_type: pillar, supporting, long_tail, tutorial, ...
- target_keyword / keyword_sequence: Keyword and its per-cluster counter
- title, subtitle, meta_description, url_slug: Generated article metadata
- outline / seo_insights: JSONB planning structures
- status: Idea lifecycle (idea -> planned -> ... -> published -> archived)
"""

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from clusterplan.core.database import Base

if TYPE_CHECKING:
    from clusterplan.models.organization import Organization


class ClusterStatus(str, Enum):
    """Lifecycle status of a content cluster."""

    PLANNING = "planning"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class ContentIdeaStatus(str, Enum):
    """Lifecycle status of a planned article."""

    IDEA = "idea"
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    DRAFT = "draft"
    REVIEW = "review"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ContentType(str, Enum):
    """Content depth tier of a planned article."""

    PILLAR = "pillar"
    SUPPORTING = "supporting"
    LONG_TAIL = "long_tail"
    NEWS = "news"
    TUTORIAL = "tutorial"
    REVIEW = "review"
    COMPARISON = "comparison"


class Level(str, Enum):
    """Three-step bucket used for traffic potential and competition."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ContentCluster(Base):
    """ContentCluster model for a planned topic hub.

    Attributes:
        id: UUID primary key
        user_id: User who created the cluster
        org_id: Owning organization
        cluster_name: Display name, unique within the organization
        pillar_keyword: Head term of the cluster
        cluster_status: Workflow status
        authority_score: Topical-authority estimate (0-10)
        total_keywords: Number of keywords selected for the cluster
        content_count: Number of content ideas persisted for the cluster
        content_gap_score: Content gap score, NULL until gap analysis exists
        research_data: JSONB copy of the research payload
        keyword_clusters: JSONB keyword cluster groups the cluster came from
    """

    __tablename__ = "content_clusters"
    __table_args__ = (
        UniqueConstraint("org_id", "cluster_name", name="uq_content_clusters_org_name"),
    )

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
        server_default=text("gen_random_uuid()"),
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    org_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    cluster_name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    pillar_keyword: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    cluster_description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    cluster_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ClusterStatus.PLANNING.value,
        server_default=text("'planning'"),
        index=True,
    )

    authority_score: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    total_keywords: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    content_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    pillar_content_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    supporting_content_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    long_tail_content_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    research_data: Mapped[dict[str, Any] | None] = mapped_column(
        JSONB,
        nullable=True,
    )

    keyword_clusters: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSONB,
        nullable=True,
    )

    estimated_traffic_potential: Mapped[str | None] = mapped_column(
        String(10),
        nullable=True,
    )

    content_gap_score: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    competition_level: Mapped[str | None] = mapped_column(
        String(10),
        nullable=True,
    )

    target_audience: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    content_strategy: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    organization: Mapped["Organization"] = relationship(
        "Organization",
        back_populates="clusters",
    )

    ideas: Mapped[list["ClusterContentIdea"]] = relationship(
        "ClusterContentIdea",
        back_populates="cluster",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<ContentCluster(id={self.id!r}, name={self.cluster_name!r}, "
            f"pillar={self.pillar_keyword!r})>"
        )


class ClusterContentIdea(Base):
    """ClusterContentIdea model for a planned article within a cluster.

    Attributes:
        id: UUID primary key
        cluster_id: Reference to the parent content cluster
        org_id: Owning organization (denormalized for tenant filters)
        content_type: Content depth tier
        target_keyword: Keyword the article targets
        keyword_sequence: 1-based counter of ideas per keyword within the cluster
        status: Idea lifecycle status
        priority: 0-10, higher is written first
        outline: JSONB article outline
        seo_insights: JSONB SEO insight block
        content_gaps / external_links_planned: NULL until those analyses exist
    """

    __tablename__ = "cluster_content_ideas"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
        server_default=text("gen_random_uuid()"),
    )

    cluster_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("content_clusters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    org_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        nullable=False,
        index=True,
    )

    content_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    target_keyword: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    keyword_sequence: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default=text("1"),
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    subtitle: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    meta_description: Mapped[str | None] = mapped_column(
        String(160),
        nullable=True,
    )

    url_slug: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ContentIdeaStatus.IDEA.value,
        server_default=text("'idea'"),
        index=True,
    )

    priority: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    word_count_target: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1500,
        server_default=text("1500"),
    )

    estimated_reading_time: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    tone: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    outline: Mapped[dict[str, Any] | None] = mapped_column(
        JSONB,
        nullable=True,
    )

    seo_insights: Mapped[dict[str, Any] | None] = mapped_column(
        JSONB,
        nullable=True,
    )

    content_gaps: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSONB,
        nullable=True,
    )

    internal_links_planned: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSONB,
        nullable=True,
    )

    external_links_planned: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSONB,
        nullable=True,
    )

    search_volume: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    keyword_difficulty: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    estimated_traffic: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
        onupdate=lambda: datetime.now(UTC),
    )

    # Relationships
    cluster: Mapped["ContentCluster"] = relationship(
        "ContentCluster",
        back_populates="ideas",
    )

    def __repr__(self) -> str:
        return (
            f"<ClusterContentIdea(id={self.id!r}, keyword={self.target_keyword!r}, "
            f"type={self.content_type!r})>"
        )

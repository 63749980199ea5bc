"""Create content_clusters and cluster_content_ideas tables.

Enhanced content clusters:
- content_clusters: Planned topic hubs, names unique per organization
- cluster_content_ideas: Planned articles within a cluster

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: str | None = "0001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create content_clusters and cluster_content_ideas tables."""
    # --- content_clusters table ---
    op.create_table(
        "content_clusters",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("org_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("cluster_name", sa.Text(), nullable=False),
        sa.Column("pillar_keyword", sa.Text(), nullable=False),
        sa.Column("cluster_description", sa.Text(), nullable=True),
        sa.Column(
            "cluster_status",
            sa.String(length=20),
            server_default=sa.text("'planning'"),
            nullable=False,
        ),
        sa.Column(
            "authority_score", sa.Integer(), server_default=sa.text("0"), nullable=False
        ),
        sa.Column(
            "total_keywords", sa.Integer(), server_default=sa.text("0"), nullable=False
        ),
        sa.Column(
            "content_count", sa.Integer(), server_default=sa.text("0"), nullable=False
        ),
        sa.Column(
            "pillar_content_count",
            sa.Integer(),
            server_default=sa.text("0"),
            nullable=False,
        ),
        sa.Column(
            "supporting_content_count",
            sa.Integer(),
            server_default=sa.text("0"),
            nullable=False,
        ),
        sa.Column(
            "long_tail_content_count",
            sa.Integer(),
            server_default=sa.text("0"),
            nullable=False,
        ),
        sa.Column(
            "research_data", postgresql.JSONB(astext_type=sa.Text()), nullable=True
        ),
        sa.Column(
            "keyword_clusters", postgresql.JSONB(astext_type=sa.Text()), nullable=True
        ),
        sa.Column("estimated_traffic_potential", sa.String(length=10), nullable=True),
        sa.Column("content_gap_score", sa.Integer(), nullable=True),
        sa.Column("competition_level", sa.String(length=10), nullable=True),
        sa.Column("target_audience", sa.Text(), nullable=True),
        sa.Column("content_strategy", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["org_id"],
            ["organizations.id"],
            name="fk_content_clusters_org_id",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "org_id", "cluster_name", name="uq_content_clusters_org_name"
        ),
    )
    op.create_index(
        op.f("ix_content_clusters_user_id"),
        "content_clusters",
        ["user_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_content_clusters_org_id"),
        "content_clusters",
        ["org_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_content_clusters_cluster_status"),
        "content_clusters",
        ["cluster_status"],
        unique=False,
    )

    # --- cluster_content_ideas table ---
    op.create_table(
        "cluster_content_ideas",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("cluster_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("org_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("content_type", sa.String(length=20), nullable=False),
        sa.Column("target_keyword", sa.Text(), nullable=False),
        sa.Column(
            "keyword_sequence", sa.Integer(), server_default=sa.text("1"), nullable=False
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("subtitle", sa.Text(), nullable=True),
        sa.Column("meta_description", sa.String(length=160), nullable=True),
        sa.Column("url_slug", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.String(length=20),
            server_default=sa.text("'idea'"),
            nullable=False,
        ),
        sa.Column("priority", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column(
            "word_count_target",
            sa.Integer(),
            server_default=sa.text("1500"),
            nullable=False,
        ),
        sa.Column("estimated_reading_time", sa.Integer(), nullable=True),
        sa.Column("tone", sa.String(length=50), nullable=True),
        sa.Column("outline", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column(
            "seo_insights", postgresql.JSONB(astext_type=sa.Text()), nullable=True
        ),
        sa.Column(
            "content_gaps", postgresql.JSONB(astext_type=sa.Text()), nullable=True
        ),
        sa.Column(
            "internal_links_planned",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
        ),
        sa.Column(
            "external_links_planned",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
        ),
        sa.Column("search_volume", sa.Integer(), nullable=True),
        sa.Column("keyword_difficulty", sa.Integer(), nullable=True),
        sa.Column("estimated_traffic", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["cluster_id"],
            ["content_clusters.id"],
            name="fk_cluster_content_ideas_cluster_id",
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        op.f("ix_cluster_content_ideas_cluster_id"),
        "cluster_content_ideas",
        ["cluster_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_cluster_content_ideas_org_id"),
        "cluster_content_ideas",
        ["org_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_cluster_content_ideas_status"),
        "cluster_content_ideas",
        ["status"],
        unique=False,
    )


def downgrade() -> None:
    """Drop cluster_content_ideas and content_clusters tables."""
    for index in ("status", "org_id", "cluster_id"):
        op.drop_index(
            op.f(f"ix_cluster_content_ideas_{index}"),
            table_name="cluster_content_ideas",
        )
    op.drop_table("cluster_content_ideas")

    for index in ("cluster_status", "org_id", "user_id"):
        op.drop_index(
            op.f(f"ix_content_clusters_{index}"), table_name="content_clusters"
        )
    op.drop_table("content_clusters")

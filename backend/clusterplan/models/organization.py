"""Organization, AppUser and AuthSession models for tenant scoping.

An Organization owns content clusters. AppUser maps an authenticated user
id to exactly one organization. AuthSession holds the opaque bearer session
ids the dashboard sends in the Authorization header.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from clusterplan.core.database import Base

if TYPE_CHECKING:
    from clusterplan.models.content_cluster import ContentCluster


class Organization(Base):
    """A tenant. Cluster names are unique within one organization."""

    __tablename__ = "organizations"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
        server_default=text("gen_random_uuid()"),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
    )

    # Relationships
    members: Mapped[list["AppUser"]] = relationship(
        "AppUser",
        back_populates="organization",
        cascade="all, delete-orphan",
    )

    clusters: Mapped[list["ContentCluster"]] = relationship(
        "ContentCluster",
        back_populates="organization",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id!r}, name={self.name!r})>"


class AppUser(Base):
    """Application profile for an authenticated user.

    Attributes:
        id: UUID primary key
        user_id: Identity-provider user id (unique)
        org_id: Owning organization
        email: Contact email
        name: Display name
        created_at: Timestamp when record was created
    """

    __tablename__ = "app_users"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
        server_default=text("gen_random_uuid()"),
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    org_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    email: Mapped[str | None] = mapped_column(
        String(320),
        nullable=True,
    )

    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
    )

    # Relationships
    organization: Mapped["Organization"] = relationship(
        "Organization",
        back_populates="members",
    )

    def __repr__(self) -> str:
        return f"<AppUser(user_id={self.user_id!r}, org_id={self.org_id!r})>"


class AuthSession(Base):
    """Bearer session issued to a signed-in user."""

    __tablename__ = "auth_sessions"

    id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("app_users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
    )

    # Relationships
    user: Mapped["AppUser"] = relationship("AppUser")

    def __repr__(self) -> str:
        return f"<AuthSession(id={self.id[:8]!r}..., user_id={self.user_id!r})>"

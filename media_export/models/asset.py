"""
Asset and Resource SQLAlchemy models.

The export tool only reads these tables; they mirror the asset repository
of the media management system.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import (
    BigInteger,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from media_export.db.base import Base

if TYPE_CHECKING:
    from media_export.models.collection import AssetCollection
    from media_export.models.tag import Tag


class Resource(Base):
    """
    Binary resource backing an asset.

    ``file_path`` points into the configured storage backend.
    """
    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        comment="Resource identifier",
    )
    filename: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Original filename",
    )
    file_size: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        comment="File size in bytes",
    )
    file_path: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Storage reference path",
    )
    media_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="application/octet-stream",
        comment="MIME type",
    )
    sha1: Mapped[str | None] = mapped_column(
        String(40),
        nullable=True,
        comment="SHA-1 hash of file",
    )

    def __repr__(self) -> str:
        return f"<Resource(filename={self.filename}, size={self.file_size})>"


class Asset(Base):
    """
    Media asset entity model.

    An asset is exportable when it has a resource and an asset source
    identifier; everything else is metadata written to the sidecar.
    """
    __tablename__ = "assets"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        comment="Globally unique identifier",
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
        comment="Asset title",
    )
    caption: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Asset caption",
    )
    last_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Last modification timestamp",
    )
    asset_source_identifier: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
        comment='Backing asset source, e.g. "neos"',
    )
    usage_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of places referencing this asset (denormalized)",
    )
    resource_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("resources.id", ondelete="SET NULL"),
        nullable=True,
        comment="Backing binary resource",
    )

    # ===================
    # Relationships
    # ===================
    resource: Mapped[Resource | None] = relationship(
        "Resource",
        lazy="selectin",
    )
    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary="asset_tags",
        lazy="selectin",
    )
    asset_collections: Mapped[list["AssetCollection"]] = relationship(
        "AssetCollection",
        secondary="asset_collection_assets",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, title={self.title}, source={self.asset_source_identifier})>"

"""
AssetCollection SQLAlchemy model.
"""

from uuid import uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from media_export.db.base import Base


class AssetCollection(Base):
    """Named grouping of assets (many-to-many)."""
    __tablename__ = "asset_collections"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        comment="Collection unique identifier",
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Collection title",
    )

    def __repr__(self) -> str:
        return f"<AssetCollection(title={self.title})>"

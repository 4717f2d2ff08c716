"""
Tag SQLAlchemy model.
"""

from uuid import uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from media_export.db.base import Base


class Tag(Base):
    """Labeled classification attached to assets (many-to-many)."""
    __tablename__ = "tags"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        comment="Tag unique identifier",
    )
    label: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Tag label",
    )

    def __repr__(self) -> str:
        return f"<Tag(label={self.label})>"

"""
Association tables for many-to-many relationships.
"""

from sqlalchemy import Column, ForeignKey, String, Table

from media_export.db.base import Base

# Asset-Tag many-to-many association table
asset_tags = Table(
    "asset_tags",
    Base.metadata,
    Column(
        "asset_id",
        String(36),
        ForeignKey("assets.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        String(36),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

# AssetCollection-Asset many-to-many association table
asset_collection_assets = Table(
    "asset_collection_assets",
    Base.metadata,
    Column(
        "asset_collection_id",
        String(36),
        ForeignKey("asset_collections.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "asset_id",
        String(36),
        ForeignKey("assets.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

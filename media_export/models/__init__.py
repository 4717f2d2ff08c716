"""
SQLAlchemy ORM models of the asset repository.
"""

from media_export.models.asset import Asset, Resource
from media_export.models.tag import Tag
from media_export.models.collection import AssetCollection
from media_export.models.associations import asset_tags, asset_collection_assets

__all__ = [
    "Asset",
    "Resource",
    "Tag",
    "AssetCollection",
    "asset_tags",
    "asset_collection_assets",
]

"""
Pydantic schemas for export artifacts.
"""

from media_export.schemas.metadata import AssetMetadata, epoch_seconds

__all__ = [
    "AssetMetadata",
    "epoch_seconds",
]

"""
Pydantic schema for the metadata sidecar written next to each exported file.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from media_export.models.asset import Asset


def epoch_seconds(value: datetime) -> int:
    """Unix timestamp of ``value``; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


class AssetMetadata(BaseModel):
    """Sidecar content: ``<filename>.meta``."""

    identifier: str
    title: str = ""
    caption: str = ""
    last_modified: int = Field(
        alias="lastModified",
        description="Last modification as Unix epoch seconds",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Tag labels in encounter order",
    )
    asset_collections: list[str] = Field(
        default_factory=list,
        alias="assetCollections",
        description="Collection titles in encounter order",
    )

    model_config = ConfigDict(
        populate_by_name=True,
    )

    @classmethod
    def from_asset(cls, asset: Asset) -> "AssetMetadata":
        return cls(
            identifier=asset.id,
            title=asset.title or "",
            caption=asset.caption or "",
            last_modified=epoch_seconds(asset.last_modified),
            tags=[tag.label for tag in asset.tags],
            asset_collections=[collection.title for collection in asset.asset_collections],
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

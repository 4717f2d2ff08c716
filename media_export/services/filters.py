"""
Filter predicates deciding whether an asset qualifies for export.

Each predicate is pure. ``should_include`` ANDs them, cheapest first.
"""

from dataclasses import dataclass
from functools import cached_property

from media_export.models.asset import Asset


@dataclass(frozen=True)
class ExportCriteria:
    """Filter settings for one export run."""

    asset_source: str = ""
    only_tags: str = ""
    only_unused: bool = False

    @cached_property
    def wanted_tags(self) -> frozenset[str] | None:
        """Parsed tag filter, or None when no tag filter is set."""
        if self.only_tags == "":
            return None
        return parse_tag_filter(self.only_tags)


def parse_tag_filter(only_tags: str) -> frozenset[str]:
    """
    Split a comma-separated tag filter into a set of labels.

    Tokens are trimmed; empty tokens are dropped, so a filter made only of
    commas and blanks matches no asset.
    """
    return frozenset(token.strip() for token in only_tags.split(",") if token.strip())


def tag_labels(asset: Asset) -> list[str]:
    """Labels of the asset's tags, in encounter order."""
    return [tag.label for tag in asset.tags]


def matches_asset_source(asset: Asset, asset_source: str) -> bool:
    if asset_source == "":
        return True
    return asset.asset_source_identifier == asset_source


def matches_usage(asset: Asset, only_unused: bool) -> bool:
    if not only_unused:
        return True
    return asset.usage_count == 0


def matches_tags(asset: Asset, wanted_tags: frozenset[str] | None) -> bool:
    """True if no tag filter is set or the asset carries a wanted tag."""
    if wanted_tags is None:
        return True
    return not wanted_tags.isdisjoint(tag_labels(asset))


def should_include(asset: Asset, criteria: ExportCriteria) -> bool:
    """Decide whether ``asset`` passes all filters of ``criteria``."""
    return (
        matches_asset_source(asset, criteria.asset_source)
        and matches_usage(asset, criteria.only_unused)
        and matches_tags(asset, criteria.wanted_tags)
    )

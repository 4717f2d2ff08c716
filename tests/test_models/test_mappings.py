"""
Tests for the ORM mappings.
"""

from sqlalchemy import inspect

from media_export.models import Asset, AssetCollection, Tag


def test_asset_relationships_load_eagerly():
    relationships = inspect(Asset).relationships

    assert {name: rel.lazy for name, rel in relationships.items()} == {
        "resource": "selectin",
        "tags": "selectin",
        "asset_collections": "selectin",
    }
    assert relationships["tags"].back_populates is None


def test_tags_and_collections_have_no_reverse_collections():
    assert not inspect(Tag).relationships
    assert not inspect(AssetCollection).relationships

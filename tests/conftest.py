import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from prompt_sync.tag_catalog import TagCatalog


@pytest.fixture
def catalog():
    """Small catalog in the shape of the editor's tag data."""
    return TagCatalog.from_records([
        {"object": "lighting", "attribute": "style", "langName": "自然光", "displayName": "Natural Lighting"},
        {"object": "lighting", "attribute": "style", "langName": "逆光", "displayName": "Backlight"},
        {"object": "sky", "attribute": "time", "langName": "日落", "displayName": "sunset"},
        {"object": "quality", "attribute": "quality", "langName": "杰作", "displayName": "masterpiece"},
    ])

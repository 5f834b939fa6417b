"""
Tag Catalog

Read-only reference vocabulary of known tags, looked up by display name.
Lookups are case-insensitive exact matches; the first entry wins when the
catalog carries case variants of the same display name.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from prompt_sync.models import Tag, tag_from_dict

logger = logging.getLogger(__name__)


class TagCatalog:
    """Immutable, ordered collection of catalog tags with a case-folded index."""

    def __init__(self, tags: Optional[Iterable[Tag]] = None):
        self._tags = tuple(tags or ())
        self._index: Dict[str, Tag] = {}

        for tag in self._tags:
            if not tag.display_name:
                continue
            key = tag.display_name.lower()
            if key in self._index:
                logger.debug(f"Duplicate catalog entry ignored: {tag.display_name!r}")
                continue
            self._index[key] = tag

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "TagCatalog":
        """
        Build a catalog from plain dicts.

        Args:
            records: Dicts with display_name/displayName, object, attribute
                and language_name/langName keys

        Returns:
            TagCatalog preserving the record order
        """
        return cls(tag_from_dict(record) for record in records)

    def lookup(self, name: str) -> Optional[Tag]:
        """
        Find the catalog entry for a display name.

        Args:
            name: Display name in any case (caller trims whitespace)

        Returns:
            The matching catalog Tag, or None when the name is free text
        """
        if not name:
            return None
        return self._index.get(name.lower())

    def to_records(self) -> List[Dict[str, Optional[str]]]:
        return [tag.model_dump() for tag in self._tags]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"TagCatalog({len(self._tags)} tags)"

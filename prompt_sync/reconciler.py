"""
Reconciler

Turns display names into catalog-backed tags and tags back into prompt text.
Tag order is preserved everywhere: earlier tags carry more weight in the
generated image, so nothing here reorders a selection.
"""

from typing import Iterable, Sequence, Tuple

from prompt_sync.models import Tag
from prompt_sync.tag_catalog import TagCatalog
from prompt_sync.tag_manager import (
    SEPARATOR, dedupe_names, join_names, normalize_prompt_text, split_live_text
)

Selection = Tuple[Tag, ...]


def resolve_name(name: str, catalog: TagCatalog) -> Tag:
    """Catalog entry for name, or a free-text tag carrying the raw name."""
    found = catalog.lookup(name)
    if found is None:
        return Tag(display_name=name)
    return Tag(
        object=found.object,
        attribute=found.attribute,
        language_name=found.language_name,
        display_name=found.display_name or name,
    )


def reconcile_from_names(names: Iterable[str], catalog: TagCatalog) -> Selection:
    """
    Resolve already-normalized names against the catalog.

    Args:
        names: Display names in prompt order
        catalog: Reference vocabulary

    Returns:
        Tags in the same order as names
    """
    return tuple(resolve_name(name, catalog) for name in names)


def reconcile_from_selection(selection: Sequence[Tag]) -> str:
    """Project a selection onto its prompt text."""
    return join_names(tag.display_name for tag in selection)


def dedupe_selection(selection: Iterable[Tag]) -> Selection:
    """Drop blank and case-insensitively repeated tags, keeping order."""
    unique_tags = []
    seen_names = set()

    for tag in selection:
        if not tag.display_name or not tag.display_name.strip():
            continue
        key = tag.display_name.lower()
        if key not in seen_names:
            unique_tags.append(tag)
            seen_names.add(key)

    return tuple(unique_tags)


def live_tags(text: str, catalog: TagCatalog) -> Selection:
    """
    Tags for text that is still being typed.

    Metadata is attached from the catalog, but the typed fragment is kept
    as the display name and duplicates are not removed.
    """
    tags = []
    for name in split_live_text(text):
        found = catalog.lookup(name)
        if found is None:
            tags.append(Tag(display_name=name))
        else:
            tags.append(Tag(
                object=found.object,
                attribute=found.attribute,
                language_name=found.language_name,
                display_name=name,
            ))
    return tuple(tags)


def commit_text(text: str, catalog: TagCatalog) -> Selection:
    """Run the full normalize + reconcile pipeline on committed text."""
    tags = reconcile_from_names(normalize_prompt_text(text), catalog)
    return tuple(tag for tag in tags if tag.display_name and tag.display_name.strip())


def merge_insert(text: str, literal: str, catalog: TagCatalog) -> Selection:
    """
    Append a constant phrase list to the current text.

    Unlike plain typing, an insert removes case-insensitive duplicates so
    pressing the same insert button twice does not repeat the phrase.
    Fragments are trimmed before deduplication and lookup.

    Args:
        text: Current prompt text
        literal: Constant text to append
        catalog: Reference vocabulary

    Returns:
        Merged selection
    """
    merged_text = text + SEPARATOR + literal if text else literal
    names = [name.strip() for name in split_live_text(merged_text)]
    return reconcile_from_names(dedupe_names(names), catalog)

"""
Tag record shared by the catalog, the reconciler and the session.
"""

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, Field


class Tag(BaseModel):
    """A single prompt tag.

    Only display_name is guaranteed for tags shown in the prompt text;
    the other fields come from the catalog and are None for free text.
    Catalog data uses camelCase keys ("displayName", "langName"), which
    are accepted on input; unknown keys are ignored.
    """
    object: Optional[str] = None
    attribute: Optional[str] = None
    language_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("language_name", "languageName", "langName", "lang_name")
    )
    display_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("display_name", "displayName")
    )


def tag_from_dict(record: Dict[str, Any]) -> Tag:
    """Build a Tag from a catalog or request dict. Raises pydantic.ValidationError."""
    return Tag.model_validate(record)

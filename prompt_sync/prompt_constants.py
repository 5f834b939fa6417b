"""
Prompt constants for the result editor

Fixed literals offered next to the prompt text:
- Negative prompt: copied as-is, independent of the selection
- Presets: constant phrase lists merged into the prompt by insert actions
- Character budget: soft limit, the count only turns red past it

Example usage:
>>> from prompt_sync.prompt_constants import DEFAULT_CONSTANTS
>>> DEFAULT_CONSTANTS.char_budget
380
>>> DEFAULT_CONSTANTS.preset_text("lighting")[:16]
'Natural Lighting'
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from prompt_sync.config_loader import DEFAULT_CONFIG


class UnknownPresetError(KeyError):
    """Raised when an insert action names a preset that is not configured."""


class Preset(BaseModel):
    text: str
    label: str = ""
    tooltip: str = ""


class PromptConstants(BaseModel):
    negative_text: str
    presets: Dict[str, Preset] = {}
    char_budget: int = 380

    def preset_text(self, key: str) -> str:
        try:
            return self.presets[key].text
        except KeyError:
            raise UnknownPresetError(key) from None

    def is_over_budget(self, char_count: int) -> bool:
        return char_count > self.char_budget


def load_prompt_constants(config: Optional[Dict[str, Any]] = None) -> PromptConstants:
    """
    Build prompt constants from the "prompt" section of a loaded config.

    Args:
        config: Full configuration dict (see config_loader.load_config)

    Returns:
        PromptConstants instance
    """
    section = dict(DEFAULT_CONFIG["prompt"])
    section.update((config or {}).get("prompt") or {})
    return PromptConstants(**section)


DEFAULT_CONSTANTS = load_prompt_constants(DEFAULT_CONFIG)

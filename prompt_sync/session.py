"""
Prompt editing session

Holds the selected tags and the prompt text for one editor and keeps them
paired. Every entry point replaces both in one step:

- set_from_tags: the tag list changed elsewhere, text is re-derived
- set_from_text: a keystroke, the text is kept verbatim (EDITING)
- commit: the text field lost focus, full normalization (back to IDLE)
- insert_constant / insert_preset: merge a constant phrase list
- clear: empty everything

The character count is always len(text); it is never stored.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional

from prompt_sync.models import Tag
from prompt_sync.prompt_constants import DEFAULT_CONSTANTS, PromptConstants
from prompt_sync.reconciler import (
    Selection, commit_text, dedupe_selection, live_tags, merge_insert,
    reconcile_from_selection
)
from prompt_sync.tag_catalog import TagCatalog

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[Selection], None]
ClipboardSink = Callable[[str], None]
Notifier = Callable[[str, str], None]


class SessionState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


class PromptSession:
    """Selection/text pair for a single prompt editor."""

    def __init__(self,
                 catalog: Optional[TagCatalog] = None,
                 constants: Optional[PromptConstants] = None,
                 selection: Optional[Iterable[Tag]] = None,
                 on_selection_change: Optional[SelectionCallback] = None,
                 clipboard: Optional[ClipboardSink] = None,
                 notifier: Optional[Notifier] = None):
        """
        Initialize a session.

        Args:
            catalog: Reference vocabulary (shared, never mutated)
            constants: Negative prompt, presets and character budget
            selection: Initial tags supplied by the host
            on_selection_change: Called with the new selection after every change
            clipboard: Receives text for copy actions
            notifier: Called with (level, message) after user actions
        """
        self.catalog = catalog if catalog is not None else TagCatalog()
        self.constants = constants or DEFAULT_CONSTANTS
        self.on_selection_change = on_selection_change
        self.clipboard = clipboard
        self.notifier = notifier

        self._selection: Selection = dedupe_selection(selection or ())
        self._text = reconcile_from_selection(self._selection)
        self._state = SessionState.IDLE

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def text(self) -> str:
        return self._text

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def char_count(self) -> int:
        return len(self._text)

    @property
    def over_budget(self) -> bool:
        return self.constants.is_over_budget(self.char_count)

    def _replace(self, selection: Selection, text: str, state: SessionState) -> None:
        self._selection = selection
        self._text = text
        self._state = state
        if self.on_selection_change:
            self.on_selection_change(selection)

    def _notify(self, level: str, message: str) -> None:
        if self.notifier:
            self.notifier(level, message)

    def set_from_tags(self, tags: Iterable[Tag]) -> None:
        """Replace the selection and re-derive the text."""
        selection = dedupe_selection(tags)
        self._replace(selection, reconcile_from_selection(selection), SessionState.IDLE)
        logger.debug(f"Selection set: {len(selection)} tags")

    def set_from_text(self, text: str) -> None:
        """
        Handle a keystroke in the text field.

        The text is kept exactly as typed; the selection follows it without
        deduplication until the edit is committed.
        """
        text = text or ""
        self._replace(live_tags(text, self.catalog), text, SessionState.EDITING)

    def commit(self) -> None:
        """Normalize the text once the text field loses focus."""
        selection = commit_text(self._text, self.catalog)
        self._replace(selection, reconcile_from_selection(selection), SessionState.IDLE)
        logger.debug(f"Committed prompt text: {len(selection)} tags, {self.char_count} chars")

    def insert_constant(self, literal: str) -> None:
        """Merge a constant phrase list into the prompt."""
        selection = merge_insert(self._text, literal, self.catalog)
        self._replace(selection, reconcile_from_selection(selection), SessionState.IDLE)
        logger.debug(f"Inserted constant text: {len(selection)} tags")
        self._notify("success", "Inserted text")

    def insert_preset(self, key: str) -> None:
        """Insert a configured preset by key. Raises UnknownPresetError."""
        self.insert_constant(self.constants.preset_text(key))

    def clear(self) -> None:
        self._replace((), "", SessionState.IDLE)
        self._notify("success", "Cleared result box")

    def copy(self) -> str:
        """Send the prompt text to the clipboard and return it."""
        text = reconcile_from_selection(self._selection)
        if self._write_clipboard(text):
            self._notify("success", "Copied to clipboard")
        return text

    def copy_negative(self) -> str:
        """Send the negative prompt to the clipboard and return it."""
        text = self.constants.negative_text
        if self._write_clipboard(text):
            self._notify("success", "Copied negative prompt")
        return text

    def _write_clipboard(self, text: str) -> bool:
        if not self.clipboard:
            return True
        try:
            self.clipboard(text)
        except Exception as e:
            # Clipboard failures never touch session state
            logger.warning(f"Clipboard write failed: {type(e).__name__}: {e}")
            self._notify("error", f"Copy failed: {e}")
            return False
        return True

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict view of the session for rendering."""
        return {
            "selection": [tag.model_dump() for tag in self._selection],
            "text": self._text,
            "char_count": self.char_count,
            "char_budget": self.constants.char_budget,
            "over_budget": self.over_budget,
            "state": self._state.value,
        }

    def __repr__(self) -> str:
        return f"PromptSession({len(self._selection)} tags, {self._state.value})"

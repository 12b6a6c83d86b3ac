"""
Text Buffer Model - line-indexed editor text with cursor-aware edits.

Line numbers are always derived from the current content; nothing is
cached between edits. After a content replacement the cursor has to be
re-placed once the new content is rendered, so the restoration is
scheduled on the next event-loop tick instead of being applied inline.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, List, Optional

INDENT = "    "
INDENT_WIDTH = len(INDENT)


@dataclass(frozen=True)
class TabInsertion:
    """Result of a tab key press: the new content and where the cursor goes."""
    content: str
    cursor: int


def insert_tab(content: str, start: int, end: int) -> TabInsertion:
    """
    Replace the selected range [start, end) with a fixed-width indent.

    Raises:
        ValueError: if the range is not inside the content
    """
    if not 0 <= start <= end <= len(content):
        raise ValueError(
            f"Selection [{start}, {end}) is outside content of length {len(content)}"
        )
    return TabInsertion(
        content=content[:start] + INDENT + content[end:],
        cursor=start + INDENT_WIDTH,
    )


def split_lines(content: str) -> List[str]:
    return content.split("\n")


def line_numbers(content: str) -> List[int]:
    """1-based line numbers for display, one per newline-separated line."""
    return list(range(1, len(split_lines(content)) + 1))


class TextBuffer:
    """
    Editable text with a selection, as seen by the editor widget.

    Usage:
        buffer = TextBuffer(doc.source, on_change=lambda text: store.update_content(doc.id, text))
        buffer.select(4, 4)
        buffer.press_tab()          # content replaced now
        await asyncio.sleep(0)      # cursor lands on the next tick
    """

    def __init__(
        self,
        content: str = "",
        on_change: Optional[Callable[[str], None]] = None,
    ):
        self._content = content
        self._on_change = on_change
        self.selection_start = 0
        self.selection_end = 0

    @property
    def content(self) -> str:
        return self._content

    @property
    def lines(self) -> List[str]:
        return split_lines(self._content)

    @property
    def line_numbers(self) -> List[int]:
        return line_numbers(self._content)

    def set_content(self, content: str) -> None:
        """Replace the whole content (typing, paste) and notify the owner."""
        self._content = content
        if self._on_change is not None:
            self._on_change(content)

    def select(self, start: int, end: Optional[int] = None) -> None:
        end = start if end is None else end
        if not 0 <= start <= end <= len(self._content):
            raise ValueError(f"Selection [{start}, {end}) is outside the content")
        self.selection_start = start
        self.selection_end = end

    def press_tab(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> asyncio.Handle:
        """
        Insert an indent over the current selection.

        The content change is applied synchronously; the cursor restoration
        is deferred with call_soon and only happens after control returns
        to the event loop.
        """
        loop = loop or asyncio.get_running_loop()
        result = insert_tab(self._content, self.selection_start, self.selection_end)
        self.set_content(result.content)
        return loop.call_soon(self._restore_cursor, result.cursor)

    def _restore_cursor(self, cursor: int) -> None:
        cursor = min(cursor, len(self._content))
        self.selection_start = self.selection_end = cursor

"""Line storage: an arena of blocks addressed by stable handles."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import count

from .exceptions import UnknownBlockError
from .models import Block


class Document:
    """Ordered lines of a Markdown document.

    Blocks live in an arena keyed by handle and never point at each other;
    neighbours are found through the document's ordering. Handles stay valid
    across edits until their line is removed.

    Examples:
        document = Document("# Title\\nBody")
        first = document.first()
        document.next(first.handle).text  # "Body"
    """

    def __init__(self, content: str = ""):
        self._blocks: dict[int, Block] = {}
        self._order: list[int] = []
        self._positions: dict[int, int] | None = None
        self._handles = count()
        self.set_content(content)

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Block]:
        return (self._blocks[handle] for handle in self._order)

    def __contains__(self, handle: object) -> bool:
        return handle in self._blocks

    def handles(self) -> tuple[int, ...]:
        return tuple(self._order)

    def text(self) -> str:
        """Join every line back into the document text."""
        return "\n".join(block.text for block in self)

    def set_content(self, content: str) -> list[int]:
        """Replace every line. An empty document still holds one empty line.

        Returns:
            list[int]: Handles of the new lines, in order.
        """
        self._blocks.clear()
        self._order.clear()
        self._invalidate()
        return self.extend(content.split("\n"))

    def extend(self, lines: Iterable[str]) -> list[int]:
        """Append lines at the end of the document."""
        return [self.insert_line(len(self._order), text) for text in lines]

    def block(self, handle: int) -> Block:
        try:
            return self._blocks[handle]
        except KeyError as error:
            raise UnknownBlockError(handle) from error

    def position(self, handle: int) -> int:
        """Zero-based line number of `handle`."""
        if handle not in self._blocks:
            raise UnknownBlockError(handle)
        if self._positions is None:
            self._positions = {value: index for index, value in enumerate(self._order)}
        return self._positions[handle]

    def at(self, position: int) -> Block:
        return self._blocks[self._order[position]]

    def first(self) -> Block | None:
        return self._blocks[self._order[0]] if self._order else None

    def previous(self, handle: int) -> Block | None:
        position = self.position(handle)
        return self.at(position - 1) if position > 0 else None

    def next(self, handle: int) -> Block | None:
        position = self.position(handle)
        return self.at(position + 1) if position + 1 < len(self._order) else None

    def insert_line(self, position: int, text: str = "") -> int:
        """Insert a line before `position` (or append when past the end).

        Returns:
            int: Handle of the new line.
        """
        handle = next(self._handles)
        self._blocks[handle] = Block(handle=handle, text=text)
        position = max(0, min(position, len(self._order)))
        self._order.insert(position, handle)
        self._invalidate()
        return handle

    def set_text(self, handle: int, text: str) -> Block:
        block = self.block(handle)
        block.text = text
        return block

    def remove_line(self, handle: int) -> Block:
        block = self.block(handle)
        self._order.pop(self.position(handle))
        del self._blocks[handle]
        self._invalidate()
        return block

    def _invalidate(self) -> None:
        self._positions = None

"""Incremental highlighter wiring document, engine, and scheduler together."""

from __future__ import annotations

import time
from collections.abc import Callable

from .config import HighlighterConfig
from .document import Document
from .engine import ClassificationEngine
from .logger import get_logger
from .models import Block, Category, Classification, LineInput
from .scheduler import DirtyBlockScheduler
from .styles import StyleProfile

logger = get_logger(__name__)


class MarkdownHighlighter:
    """Keep the classification of a document current as it is edited.

    Edit notifications only queue lines; reclassification happens when the
    host calls `tick` (or `poll`) on its timer. Reclassifying a line may queue
    its neighbours: the next line when the carried state changed, and the
    previous line when the current one turned out to be a setext underline.

    Args:
        config: Highlighter options.
        profile: Style profile supplied by the host.
        document: Document to highlight; an empty one is created when omitted.
        clock: Monotonic clock used for `poll`.

    Examples:
        highlighter = MarkdownHighlighter(HighlighterConfig(), default_profile())
        highlighter.set_content("Title\\n=====")
        highlighter.tick()
        highlighter.document.at(0).state  # Category.H1
    """

    def __init__(
        self,
        config: HighlighterConfig | None,
        profile: StyleProfile,
        document: Document | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.engine = ClassificationEngine(config, profile)
        self.document = document if document is not None else Document()
        config = self.engine.config
        self.scheduler = DirtyBlockScheduler(
            self.rehighlight_block,
            interval=config.tick_interval,
            clock=clock,
            max_lines_per_drain=config.max_lines_per_drain,
        )
        self._mark_all_dirty()

    @property
    def config(self) -> HighlighterConfig:
        return self.engine.config

    @property
    def profile(self) -> StyleProfile:
        return self.engine.profile

    def set_profile(self, profile: StyleProfile) -> None:
        """Swap the style profile and queue every line for restyling."""
        self.engine.set_profile(profile)
        self._mark_all_dirty()

    def set_options(self, config: HighlighterConfig) -> None:
        """Rebuild the rules from `config` and queue every line.

        Raises:
            ConfigError: If `config` is invalid; the current setup is kept.
        """
        engine = ClassificationEngine(config, self.engine.profile)
        self.engine = engine
        self.scheduler.interval = engine.config.tick_interval
        self.scheduler.max_lines_per_drain = engine.config.max_lines_per_drain
        self._mark_all_dirty()

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Call `callback` once after every tick that reclassified lines."""
        self.scheduler.add_listener(callback)

    # Edit notifications

    def set_content(self, content: str) -> None:
        self.scheduler.clear()
        self.document.set_content(content)
        self._mark_all_dirty()

    def edit_line(self, handle: int, text: str) -> None:
        self.document.set_text(handle, text)
        self._mark_affected(handle)

    def insert_line(self, position: int, text: str = "") -> int:
        handle = self.document.insert_line(position, text)
        self._mark_affected(handle)
        following = self.document.next(handle)
        if following is not None:
            # the pushed-down line may have lost its first-line front matter
            self.scheduler.mark_dirty(following.handle)
        return handle

    def remove_line(self, handle: int) -> None:
        following = self.document.next(handle)
        self.document.remove_line(handle)
        self.scheduler.discard(handle)
        if following is not None:
            self._mark_affected(following.handle)
        elif len(self.document):
            self.scheduler.mark_dirty(self.document.at(len(self.document) - 1).handle)

    # Classification

    def tick(self) -> bool:
        return self.scheduler.tick()

    def poll(self, now: float | None = None) -> bool:
        return self.scheduler.poll(now)

    def highlight_all(self) -> int:
        """Classify every queued line synchronously, ignoring the drain bound.

        Returns:
            int: Number of lines reclassified.
        """
        processed = 0
        while self.scheduler.pending:
            processed += self.scheduler.drain()
        return processed

    def line_input(self, handle: int) -> LineInput:
        """Snapshot `handle` and the neighbour data classification needs."""
        block = self.document.block(handle)
        previous = self.document.previous(handle)
        following = self.document.next(handle)
        first = self.document.first()
        return LineInput(
            text=block.text,
            previous_state=previous.state if previous is not None else Category.NoState,
            previous_text=previous.text if previous is not None else "",
            next_text=following.text if following is not None else "",
            first_text=first.text if first is not None else "",
            is_first=first is block,
        )

    def rehighlight_block(self, handle: int) -> Classification | None:
        """Reclassify one line and queue the neighbours it affects.

        Returns:
            Classification | None: The new classification, or None when the
                line no longer exists.
        """
        if handle not in self.document:
            return None

        block = self.document.block(handle)
        result = self.engine.classify(self.line_input(handle))
        self._commit(block, result)
        return result

    def _commit(self, block: Block, result: Classification) -> None:
        state_changed = block.state != result.state
        block.spans = result.spans
        block.state = result.state
        block.revision += 1

        if result.promote_previous is not None or result.requeue_previous:
            previous = self.document.previous(block.handle)
            if previous is not None:
                if result.promote_previous is not None:
                    previous.state = result.promote_previous
                if result.requeue_previous:
                    self.scheduler.mark_dirty(previous.handle)

        if state_changed:
            following = self.document.next(block.handle)
            if following is not None:
                self.scheduler.mark_dirty(following.handle)

    def _mark_affected(self, handle: int) -> None:
        # the line above may be a setext heading text waiting for this underline
        previous = self.document.previous(handle)
        if previous is not None:
            self.scheduler.mark_dirty(previous.handle)
        self.scheduler.mark_dirty(handle)

    def _mark_all_dirty(self) -> None:
        for handle in self.document.handles():
            self.scheduler.mark_dirty(handle)
        logger.debug("Queued %d line(s) for highlighting", len(self.scheduler))

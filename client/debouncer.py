"""
Debounced suggestion state for a search box.

Every keystroke cancels the pending timer and schedules a new one, so only
the last change in a burst reaches the network. Selection is terminal: it
fills the box with the chosen name and never schedules a fetch.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

from client.api import Suggestion

logger = logging.getLogger(__name__)

QUIET_PERIOD = 0.3  # seconds
MIN_QUERY_LENGTH = 2

SuggestionSource = Callable[[str], Awaitable[Sequence[Suggestion]]]


class SuggestionDebouncer:
    def __init__(
        self,
        source: SuggestionSource,
        quiet_period: float = QUIET_PERIOD,
        guard_stale_responses: bool = False,
    ):
        self._source = source
        self.quiet_period = quiet_period
        # Off by default: a slow earlier response may overwrite a newer one.
        self.guard_stale_responses = guard_stale_responses

        self.query = ""
        self.suggestions: list[Suggestion] = []
        self.is_loading = False
        self.show_suggestions = False
        self.selected_item: Optional[Suggestion] = None

        self._timer: Optional[asyncio.TimerHandle] = None
        self._tasks: set[asyncio.Task] = set()
        self._generation = 0

    def set_query(self, text: str) -> None:
        """Record a keystroke. Must be called from the running event loop."""
        self.query = text
        self._generation += 1
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(
            self.quiet_period, self._on_quiet, self._generation, text
        )

    def focus(self) -> None:
        if len(self.query) >= MIN_QUERY_LENGTH:
            self.show_suggestions = True

    def click_outside(self) -> None:
        self.show_suggestions = False

    def select(self, item: Suggestion) -> None:
        self._cancel_timer()
        self._generation += 1
        self.selected_item = item
        self.query = item.name
        self.show_suggestions = False

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and no fetch is in flight."""
        loop = asyncio.get_running_loop()
        while self._timer is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(max(0.0, self._timer.when() - loop.time()))
                # let the timer callback run
                await asyncio.sleep(0)

    def close(self) -> None:
        self._cancel_timer()
        for task in list(self._tasks):
            task.cancel()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_quiet(self, generation: int, text: str) -> None:
        self._timer = None
        if len(text.strip()) < MIN_QUERY_LENGTH:
            self.suggestions = []
            return
        task = asyncio.ensure_future(self._fetch(generation, text))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(self, generation: int, text: str) -> None:
        self.is_loading = True
        try:
            items = await self._source(text)
        except Exception:
            logger.exception("Search error")
            return
        finally:
            self.is_loading = False

        if self.guard_stale_responses and generation != self._generation:
            logger.debug("Dropping stale suggestions for %r", text)
            return
        self.suggestions = list(items)
        self.show_suggestions = True

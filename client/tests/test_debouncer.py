import asyncio
import unittest

from client.api import Suggestion
from client.debouncer import SuggestionDebouncer

QUIET = 0.05

NINTENDO = Suggestion(id=6, name="Nintendo Switch", description="Hybrid gaming console")
PLAYSTATION = Suggestion(id=7, name="PlayStation 5", description="Next-gen gaming console")


class FakeSource:
    """Async suggestion source that records each query it is asked for."""

    def __init__(self, results=None, delays=None, error=None):
        self.results = results or {}
        self.delays = delays or {}
        self.error = error
        self.calls = []

    async def __call__(self, text):
        self.calls.append(text)
        await asyncio.sleep(self.delays.get(text, 0))
        if self.error:
            raise self.error
        return self.results.get(text, [])


class SuggestionDebouncerTests(unittest.IsolatedAsyncioTestCase):
    async def test_burst_triggers_one_fetch_for_last_value(self):
        source = FakeSource(results={"Nint": [NINTENDO]})
        debouncer = SuggestionDebouncer(source, quiet_period=QUIET)

        debouncer.set_query("Ni")
        debouncer.set_query("Nin")
        debouncer.set_query("Nint")
        await debouncer.wait_idle()

        self.assertEqual(source.calls, ["Nint"])
        self.assertEqual(debouncer.suggestions, [NINTENDO])
        self.assertTrue(debouncer.show_suggestions)
        self.assertFalse(debouncer.is_loading)

    async def test_nothing_is_fetched_before_quiet_period(self):
        source = FakeSource()
        debouncer = SuggestionDebouncer(source, quiet_period=QUIET)
        self.addCleanup(debouncer.close)

        debouncer.set_query("Nin")
        await asyncio.sleep(QUIET / 5)
        self.assertEqual(source.calls, [])

    async def test_short_input_clears_without_network(self):
        source = FakeSource(results={"Nin": [NINTENDO]})
        debouncer = SuggestionDebouncer(source, quiet_period=QUIET)

        debouncer.set_query("Nin")
        await debouncer.wait_idle()
        self.assertEqual(debouncer.suggestions, [NINTENDO])

        debouncer.set_query("N")
        await debouncer.wait_idle()
        debouncer.set_query(" N  ")
        await debouncer.wait_idle()

        self.assertEqual(source.calls, ["Nin"])
        self.assertEqual(debouncer.suggestions, [])

    async def test_loading_flag_spans_the_call(self):
        source = FakeSource(results={"gam": [NINTENDO]}, delays={"gam": QUIET})
        debouncer = SuggestionDebouncer(source, quiet_period=QUIET)

        debouncer.set_query("gam")
        await asyncio.sleep(QUIET * 1.5)
        self.assertTrue(debouncer.is_loading)
        await debouncer.wait_idle()
        self.assertFalse(debouncer.is_loading)

    async def test_select_sets_text_and_hides_without_fetch(self):
        source = FakeSource(results={"gam": [NINTENDO, PLAYSTATION]})
        debouncer = SuggestionDebouncer(source, quiet_period=QUIET)

        debouncer.set_query("gam")
        await debouncer.wait_idle()
        self.assertEqual(source.calls, ["gam"])

        debouncer.select(PLAYSTATION)
        await asyncio.sleep(QUIET * 2)
        await debouncer.wait_idle()

        self.assertEqual(debouncer.query, "PlayStation 5")
        self.assertEqual(debouncer.selected_item, PLAYSTATION)
        self.assertFalse(debouncer.show_suggestions)
        self.assertEqual(source.calls, ["gam"])

    async def test_select_cancels_pending_fetch(self):
        source = FakeSource()
        debouncer = SuggestionDebouncer(source, quiet_period=QUIET)

        debouncer.set_query("Play")
        debouncer.select(PLAYSTATION)
        await asyncio.sleep(QUIET * 2)

        self.assertEqual(source.calls, [])
        self.assertEqual(debouncer.query, "PlayStation 5")

    async def test_click_outside_and_focus(self):
        source = FakeSource(results={"gam": [NINTENDO]})
        debouncer = SuggestionDebouncer(source, quiet_period=QUIET)

        debouncer.set_query("gam")
        await debouncer.wait_idle()
        self.assertTrue(debouncer.show_suggestions)

        debouncer.click_outside()
        self.assertFalse(debouncer.show_suggestions)
        self.assertEqual(debouncer.suggestions, [NINTENDO])

        debouncer.focus()
        self.assertTrue(debouncer.show_suggestions)

    async def test_failed_fetch_keeps_previous_suggestions(self):
        source = FakeSource(results={"gam": [NINTENDO]})
        debouncer = SuggestionDebouncer(source, quiet_period=QUIET)
        debouncer.set_query("gam")
        await debouncer.wait_idle()

        source.error = RuntimeError("HTTP 500")
        with self.assertLogs("client.debouncer", level="ERROR"):
            debouncer.set_query("gami")
            await debouncer.wait_idle()

        self.assertEqual(debouncer.suggestions, [NINTENDO])
        self.assertFalse(debouncer.is_loading)

    async def test_stale_response_is_applied_by_default(self):
        source = FakeSource(
            results={"gam": [NINTENDO, PLAYSTATION], "gaming": [NINTENDO]},
            delays={"gam": QUIET * 3},
        )
        debouncer = SuggestionDebouncer(source, quiet_period=QUIET)

        debouncer.set_query("gam")
        await asyncio.sleep(QUIET * 1.5)
        debouncer.set_query("gaming")
        await debouncer.wait_idle()

        self.assertEqual(source.calls, ["gam", "gaming"])
        self.assertEqual(debouncer.suggestions, [NINTENDO, PLAYSTATION])

    async def test_stale_response_guard(self):
        source = FakeSource(
            results={"gam": [NINTENDO, PLAYSTATION], "gaming": [NINTENDO]},
            delays={"gam": QUIET * 3},
        )
        debouncer = SuggestionDebouncer(
            source, quiet_period=QUIET, guard_stale_responses=True
        )

        debouncer.set_query("gam")
        await asyncio.sleep(QUIET * 1.5)
        debouncer.set_query("gaming")
        await debouncer.wait_idle()

        self.assertEqual(debouncer.suggestions, [NINTENDO])


if __name__ == "__main__":
    unittest.main()

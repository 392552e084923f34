"""
Tests for the watcher loop - startup, tick ordering and shutdown.
"""
import itertools
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from spotui.dispatcher import Dispatcher
from spotui.events import Intent, NextTrack, Quit, ResumePause
from spotui.exceptions import AuthFailure, RemoteCallFailure
from spotui.managers import PlaybackRefresher
from spotui.watcher import start_watcher, startup, tick

from conftest import make_playback


@pytest.fixture
def dispatcher(api):
    return Dispatcher(api)


@pytest.fixture
def refresher(api, shared_state, intents):
    # Clock advances on every read, so with a zero interval every tick polls playback
    ticks = itertools.count()
    shared_state.mutate(lambda s: setattr(s, 'auth_token_expiry', 1e9))
    return PlaybackRefresher(api, shared_state, intents, interval=0.0, clock=lambda: float(next(ticks)))


class TestStartup:
    """Tests for the mandatory startup refresh."""

    def test_startup_fetches_token_and_playback(self, api, shared_state, dispatcher, refresher):
        """Startup stores the token expiry and the first playback context."""
        api.playback = make_playback()
        startup(shared_state, dispatcher, refresher)

        state = shared_state.snapshot()
        assert state.auth_token_expiry == api.expires_at
        assert state.current_playback_context == api.playback
        assert api.calls == [('refresh_credential',), ('fetch_current_playback',)]

    def test_auth_failure_is_fatal(self, api, shared_state, dispatcher, refresher, intents):
        """start_watcher raises when the first token can't be obtained."""
        api.refresh_error = AuthFailure('auth failed')
        with pytest.raises(AuthFailure):
            start_watcher(shared_state, dispatcher, refresher, intents, tick_interval=0)

    def test_playback_failure_is_fatal(self, api, shared_state, dispatcher, refresher, intents):
        """start_watcher raises when the first playback fetch fails."""
        api.playback_error = RemoteCallFailure('Service unavailable', 503)
        with pytest.raises(RemoteCallFailure):
            start_watcher(shared_state, dispatcher, refresher, intents, tick_interval=0)


class TestTick:
    """Tests for a single loop step."""

    def test_empty_queue_only_refreshes(self, api, shared_state, dispatcher, refresher, intents):
        """With no intent pending, a tick just runs the refresher."""
        tick(shared_state, dispatcher, refresher, intents)
        assert api.calls == [('fetch_current_playback',)]

    def test_one_intent_per_tick(self, api, shared_state, dispatcher, refresher, intents):
        """At most one intent is dispatched per tick, in arrival order."""
        intents.put(NextTrack())
        intents.put(NextTrack())
        tick(shared_state, dispatcher, refresher, intents)

        assert api.calls == [('next',), ('fetch_current_playback',)]
        assert intents.qsize() == 1

    def test_intent_failure_is_not_fatal(self, api, shared_state, dispatcher, refresher, intents):
        """A failing intent is logged and the loop keeps running."""
        intents.put(ResumePause())  # No playback context -> NoActiveContext
        tick(shared_state, dispatcher, refresher, intents)

        assert shared_state.is_running is True
        assert intents.empty()
        assert api.calls == [('fetch_current_playback',)]

    def test_unknown_intent_is_not_fatal(self, api, shared_state, dispatcher, refresher, intents):
        """An intent without a handler is logged and the next one still runs."""
        class Unhandled(Intent):
            pass

        intents.put(Unhandled())
        intents.put(NextTrack())
        tick(shared_state, dispatcher, refresher, intents)
        tick(shared_state, dispatcher, refresher, intents)

        assert shared_state.is_running is True
        assert ('next',) in api.calls

    def test_refresh_failure_is_not_fatal(self, api, shared_state, dispatcher, refresher, intents):
        """A failing playback poll is logged and the loop keeps running."""
        api.playback_error = RemoteCallFailure('Service unavailable', 503)
        tick(shared_state, dispatcher, refresher, intents)
        assert shared_state.is_running is True

    def test_no_gateway_calls_after_quit(self, api, shared_state, dispatcher, refresher, intents):
        """After Quit, neither the same tick nor later ticks call the gateway."""
        intents.put(Quit())
        intents.put(NextTrack())
        tick(shared_state, dispatcher, refresher, intents)
        tick(shared_state, dispatcher, refresher, intents)

        assert shared_state.is_running is False
        assert api.calls == []


class TestStartWatcher:
    """Tests for the full loop."""

    def test_runs_until_quit(self, api, shared_state, dispatcher, refresher, intents):
        """The loop returns cleanly after Quit."""
        intents.put(NextTrack())
        intents.put(Quit())
        start_watcher(shared_state, dispatcher, refresher, intents, tick_interval=0)

        assert shared_state.is_running is False
        assert api.calls == [
            ('refresh_credential',),
            ('fetch_current_playback',),
            ('next',),
            ('fetch_current_playback',),
        ]

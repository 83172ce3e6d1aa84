"""
Pytest fixtures for Word Zapp tests.
"""

import random

import pytest

from wordzapp.dictionary import DictionaryService
from wordzapp.game_logic import GameEngine
from wordzapp.managers.timer import TimerManager

SCENARIO_LETTERS = 'AERTSNLO'

SCENARIO_WORDS = {
    'RATS', 'STARE', 'RAT', 'ART', 'TAR', 'TEA', 'EAT', 'ATE', 'SEA', 'STAR',
    'RATE', 'TEAR', 'NOTE', 'TONE', 'LATE', 'SALT', 'TALE', 'LEAN', 'CAT',
}


class FakeSio:
    """Records emits instead of sending them."""

    def __init__(self):
        self.events = []
        self.sessions = {}
        self.rooms = {}

    async def emit(self, event, data=None, room=None, to=None):
        self.events.append((event, data, room or to))

    async def save_session(self, sid, session):
        self.sessions[sid] = dict(session)

    async def get_session(self, sid):
        session = self.sessions.get(sid)
        return dict(session) if session is not None else None

    async def enter_room(self, sid, room):
        self.rooms.setdefault(sid, set()).add(room)

    async def leave_room(self, sid, room):
        self.rooms.get(sid, set()).discard(room)

    def sent_to(self, target):
        return [(name, data) for name, data, dest in self.events if dest == target]

    def names(self):
        return [name for name, _, _ in self.events]

    def of(self, event):
        return [data for name, data, _ in self.events if name == event]


@pytest.fixture
def dictionary() -> DictionaryService:
    return DictionaryService(SCENARIO_WORDS)


@pytest.fixture
def engine(dictionary) -> GameEngine:
    """Engine with a known letter set."""
    return GameEngine(dictionary, letters=SCENARIO_LETTERS, rng=random.Random(7))


@pytest.fixture
def sio() -> FakeSio:
    return FakeSio()


@pytest.fixture
def fast_timer():
    """Scheduler with intervals small enough for tests; zapper effectively off unless asked."""
    def make(tick_interval=0.001, zap_interval=60.0, zap_jitter=0.0, rng=None):
        return TimerManager(
            tick_interval=tick_interval,
            zap_interval=zap_interval,
            zap_jitter=zap_jitter,
            rng=rng,
        )
    return make

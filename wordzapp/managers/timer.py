from __future__ import annotations
import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Coroutine, Dict, Optional, Set

from ..config import TICK_INTERVAL, TIME_LIMIT, ZAP_INTERVAL, ZAP_JITTER
from ..schemas import TimerState

logger = logging.getLogger(__name__)


@dataclass
class GameClock:
    time_limit: int
    time_left: int
    # cancellation token, checked by every task after it wakes up
    stopped: bool = False

    def snapshot(self) -> TimerState:
        return TimerState(
            timeLeft=max(0, self.time_left),
            timeLimit=self.time_limit,
            isStopped=self.stopped,
        )


TickCallback = Callable[[GameClock], Awaitable[None]]
Callback = Callable[[], Awaitable[None]]


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class TimerManager:
    """
    Runs two independent periodic tasks per game: the countdown and the
    zapper. Both stop for good once ``stop`` is called for the game.
    """

    def __init__(
        self,
        tick_interval: float = TICK_INTERVAL,
        zap_interval: float = ZAP_INTERVAL,
        zap_jitter: float = ZAP_JITTER,
        rng: Optional[random.Random] = None,
    ):
        self.tick_interval = tick_interval
        self.zap_interval = zap_interval
        self.zap_jitter = zap_jitter
        self.rng = rng or random.Random()
        self._clocks: Dict[str, GameClock] = {}
        self._tasks: Dict[str, Set[asyncio.Task]] = {}

    def create_clock(self, game_id: str, time_limit: int = TIME_LIMIT) -> GameClock:
        # never reuse a previous game's clock or tasks
        self.stop(game_id)
        clock = GameClock(time_limit=time_limit, time_left=time_limit)
        self._clocks[game_id] = clock
        self._tasks[game_id] = set()
        return clock

    def start(self, game_id: str, on_tick: TickCallback, on_expire: Callback, on_zap: Callback) -> GameClock:
        clock = self._clocks.get(game_id)
        if not clock or clock.stopped:
            clock = self.create_clock(game_id)
        self._spawn(game_id, self._run_countdown(clock, on_tick, on_expire))
        self._spawn(game_id, self._run_zapper(game_id, clock, on_zap))
        return clock

    def stop(self, game_id: str):
        clock = self._clocks.get(game_id)
        if clock:
            clock.stopped = True
        current = _current_task()
        for task in list(self._tasks.get(game_id, ())):
            # the caller's own task exits through the token
            if task is not current:
                task.cancel()

    def remove(self, game_id: str):
        self.stop(game_id)
        self._clocks.pop(game_id, None)
        self._tasks.pop(game_id, None)

    async def shutdown(self):
        pending = [t for tasks in self._tasks.values() for t in tasks]
        for game_id in list(self._clocks):
            self.stop(game_id)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def get_state(self, game_id: str) -> Optional[TimerState]:
        clock = self._clocks.get(game_id)
        if not clock:
            return None
        return clock.snapshot()

    def pending(self, game_id: str) -> int:
        return sum(1 for t in self._tasks.get(game_id, ()) if not t.done())

    def _spawn(self, game_id: str, coro: Coroutine) -> asyncio.Task:
        task = asyncio.create_task(coro)
        tasks = self._tasks.setdefault(game_id, set())
        tasks.add(task)
        task.add_done_callback(tasks.discard)
        return task

    async def _run_countdown(self, clock: GameClock, on_tick: TickCallback, on_expire: Callback):
        try:
            while True:
                await asyncio.sleep(self.tick_interval)
                if clock.stopped:
                    return
                clock.time_left -= 1
                await on_tick(clock)
                if clock.stopped:
                    return
                if clock.time_left <= 0:
                    await on_expire()
                    return
        except asyncio.CancelledError:
            return

    async def _run_zapper(self, game_id: str, clock: GameClock, on_zap: Callback):
        # each firing waits a further random delay, so several may be pending at once
        try:
            while True:
                await asyncio.sleep(self.zap_interval)
                if clock.stopped:
                    return
                delay = self.rng.uniform(0, self.zap_jitter)
                self._spawn(game_id, self._zap_after(clock, delay, on_zap))
        except asyncio.CancelledError:
            return

    async def _zap_after(self, clock: GameClock, delay: float, on_zap: Callback):
        try:
            await asyncio.sleep(delay)
            if clock.stopped:
                return
            await on_zap()
        except asyncio.CancelledError:
            return

from __future__ import annotations
import asyncio
import logging
import random
import uuid
from collections import OrderedDict
from typing import Callable, Container, Dict, Iterable, Optional

from ..config import FINISHED_GAMES_KEPT, SUBMISSION_CAP, TIME_LIMIT, WORD_LIMIT
from ..game_logic import GameEngine, SubmissionError
from ..schemas import GameOver, GameSnapshot, SubmitResult, TimerState, ZapEvent
from .timer import GameClock, TimerManager

logger = logging.getLogger(__name__)


class Game:
    def __init__(
        self,
        game_id: str,
        sio,
        timer: TimerManager,
        dictionary: Container[str],
        letters: Optional[Iterable[str]] = None,
        seed: Optional[int] = None,
        word_limit: int = WORD_LIMIT,
        time_limit: int = TIME_LIMIT,
        submission_cap: int = SUBMISSION_CAP,
        on_end: Optional[Callable[[Game], None]] = None,
    ):
        self.id = game_id
        self.sio = sio
        self.timer = timer
        self.rng = random.Random(seed)
        self.engine = GameEngine(
            dictionary,
            word_limit=word_limit,
            time_limit=time_limit,
            letters=letters,
            rng=self.rng,
        )
        self.submission_cap = submission_cap
        self.on_end = on_end
        self.status: str = 'waiting'
        self.end_reason: Optional[str] = None
        self.finished = asyncio.Event()

    def to_state(self) -> GameSnapshot:
        ts = self.timer.get_state(self.id)
        return GameSnapshot(
            id=self.id,
            letters=list(self.engine.draw_order),
            submitted=self.engine.submitted,
            zapped=self.engine.zapped,
            locked=self.engine.locked,
            status=self.status,  # type: ignore
            wordLimit=self.engine.word_limit,
            timeLimit=self.engine.time_limit,
            timeLeft=ts.timeLeft if ts else None,
            tally=self.engine.tally,
        )

    async def start(self):
        if self.status != 'waiting':
            return
        self.status = 'active'
        self.timer.create_clock(self.id, self.engine.time_limit)
        self.timer.start(self.id, self._on_tick, self._on_expire, self.zap_random)
        logger.info('Game %s started with letters %s', self.id, ''.join(self.engine.draw_order))
        await self.sio.emit('game:state', self.to_state().model_dump(), room=self.id)

    async def submit(self, word: str) -> SubmitResult:
        try:
            self.engine.submit(word)
        except SubmissionError as e:
            logger.debug('Game %s rejected %r: %s', self.id, word, e.kind.value)
            result = SubmitResult(
                ok=False,
                word=e.word or word,
                error=e.kind.value,
                message=e.message,
                submitted=self.engine.submitted,
                locked=self.engine.locked,
            )
            await self.sio.emit('game:rejected', result.model_dump(), room=self.id)
            return result

        result = SubmitResult(
            ok=True,
            word=word.strip().upper(),
            submitted=self.engine.submitted,
            locked=self.engine.locked,
        )
        await self.sio.emit('game:submitted', result.model_dump(), room=self.id)
        if self.engine.locked:
            await self.end('word-limit')
        return result

    async def zap(self, word: str) -> bool:
        if not self.engine.zap(word):
            return False
        logger.info('Game %s zapped: %s', self.id, word)
        event = ZapEvent(word=word, submitted=self.engine.submitted, zapped=self.engine.zapped)
        await self.sio.emit('game:zapped', event.model_dump(), room=self.id)
        return True

    async def zap_random(self) -> Optional[str]:
        # pick from the words submitted at firing time
        if self.engine.locked:
            return None
        word = self.engine.random_submission()
        if word is None:
            return None
        await self.zap(word)
        return word

    async def end(self, reason: str):
        if self.status == 'finished':
            return
        self.engine.end()
        self.status = 'finished'
        self.end_reason = reason
        self.timer.stop(self.id)
        self.finished.set()
        logger.info('Game %s over (%s), total words: %s', self.id, reason, self.engine.tally)
        over = GameOver(
            reason=reason,  # type: ignore
            tally=self.engine.tally,
            submitted=self.engine.submitted,
            zapped=self.engine.zapped,
        )
        await self.sio.emit('game:over', over.model_dump(), room=self.id)
        if self.on_end:
            self.on_end(self)

    async def _on_tick(self, clock: GameClock):
        await self.sio.emit('timer-sync', clock.snapshot().model_dump(), room=self.id)
        # secondary cap, independent of the engine's word limit
        if self.engine.tally >= self.submission_cap:
            await self.end('submission-cap')

    async def _on_expire(self):
        await self.end('time')


class GameManager:
    def __init__(
        self,
        sio,
        dictionary: Container[str],
        timer: Optional[TimerManager] = None,
        keep_finished: int = FINISHED_GAMES_KEPT,
    ):
        self.sio = sio
        self.dictionary = dictionary
        self.timer = timer or TimerManager()
        self.keep_finished = keep_finished
        self.games: Dict[str, Game] = {}
        # oldest first
        self._finished: Dict[str, Game] = OrderedDict()

    def get(self, game_id: str) -> Game:
        try:
            return self.games[game_id]
        except KeyError:
            raise KeyError(f'Unknown game: {game_id}') from None

    async def new_game(
        self,
        game_id: Optional[str] = None,
        letters: Optional[Iterable[str]] = None,
        seed: Optional[int] = None,
        **limits,
    ) -> Game:
        game_id = game_id or uuid.uuid4().hex
        # a finished or running game is never reused
        await self.remove(game_id)
        game = Game(
            game_id,
            self.sio,
            self.timer,
            self.dictionary,
            letters=letters,
            seed=seed,
            on_end=self._release_finished,
            **limits,
        )
        self.games[game_id] = game
        await game.start()
        return game

    async def submit(self, game_id: str, word: str) -> SubmitResult:
        game = self.get(game_id)
        return await game.submit(word)

    def get_timer_state(self, game_id: str) -> Optional[TimerState]:
        return self.timer.get_state(game_id)

    async def remove(self, game_id: str):
        game = self.games.pop(game_id, None)
        self._finished.pop(game_id, None)
        if game:
            game.engine.end()
        self.timer.remove(game_id)

    async def shutdown(self):
        for game in self.games.values():
            game.engine.end()
        await self.timer.shutdown()
        self.games.clear()
        self._finished.clear()

    def _release_finished(self, game: Game):
        """Keep the most recent finished games for lookups, drop older ones."""
        self._finished.pop(game.id, None)
        self._finished[game.id] = game
        while len(self._finished) > self.keep_finished:
            game_id, old = self._finished.popitem(last=False)
            if self.games.get(game_id) is old:
                del self.games[game_id]
                self.timer.remove(game_id)
            logger.debug('Released finished game %s', game_id)

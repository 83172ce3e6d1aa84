from __future__ import annotations
from pydantic import BaseModel
from typing import List, Literal, Optional

GameStatus = Literal['waiting', 'active', 'finished']

EndReason = Literal['time', 'word-limit', 'submission-cap']


class GameConfig(BaseModel):
    letterCount: int
    minWordLength: int
    wordLimit: int
    timeLimit: int
    submissionCap: int
    zapInterval: float
    zapJitter: float


class TimerState(BaseModel):
    # whole seconds
    timeLeft: int
    timeLimit: int
    isStopped: bool = False


class GameSnapshot(BaseModel):
    id: str
    letters: List[str]
    submitted: List[str] = []
    zapped: List[str] = []
    locked: bool = False
    status: GameStatus = 'waiting'
    wordLimit: int
    timeLimit: int
    timeLeft: Optional[int] = None
    tally: int = 0


class NewGameRequest(BaseModel):
    letters: Optional[str] = None
    seed: Optional[int] = None


class SubmitRequest(BaseModel):
    word: str


class SubmitResult(BaseModel):
    ok: bool
    word: str
    error: Optional[str] = None
    message: Optional[str] = None
    submitted: List[str] = []
    locked: bool = False


class ZapEvent(BaseModel):
    word: str
    submitted: List[str]
    zapped: List[str]


class GameOver(BaseModel):
    reason: EndReason
    tally: int
    submitted: List[str]
    zapped: List[str]


class WordCheck(BaseModel):
    word: str
    valid: bool

from __future__ import annotations
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import socketio
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from . import config
from .schemas import GameConfig, GameSnapshot, NewGameRequest, SubmitRequest, SubmitResult, WordCheck
from .managers.game import GameManager
from .dictionary import service as dict_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Dictionary is loaded once, before any game starts
    count = await dict_service.load(config.DICTIONARY_PATH)
    logger.info('Dictionary ready with %s words', count)
    yield
    await games.shutdown()


# Socket.IO server (ASGI)
sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins='*')
app = FastAPI(title="Word Zapp Server", version="0.1.0", lifespan=lifespan)

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

games = GameManager(sio, dict_service)


# REST Endpoints
@app.get('/config')
async def get_config() -> GameConfig:
    return GameConfig(
        letterCount=config.LETTER_COUNT,
        minWordLength=config.MIN_WORD_LENGTH,
        wordLimit=config.WORD_LIMIT,
        timeLimit=config.TIME_LIMIT,
        submissionCap=config.SUBMISSION_CAP,
        zapInterval=config.ZAP_INTERVAL,
        zapJitter=config.ZAP_JITTER,
    )


@app.post('/games')
async def create_game(request: Optional[NewGameRequest] = None) -> GameSnapshot:
    request = request or NewGameRequest()
    try:
        game = await games.new_game(letters=request.letters, seed=request.seed)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return game.to_state()


@app.get('/games/{game_id}')
async def get_game(game_id: str) -> GameSnapshot:
    try:
        return games.get(game_id).to_state()
    except KeyError:
        raise HTTPException(status_code=404, detail='Game not found')


@app.post('/games/{game_id}/words')
async def submit_word(game_id: str, request: SubmitRequest) -> SubmitResult:
    try:
        return await games.submit(game_id, request.word)
    except KeyError:
        raise HTTPException(status_code=404, detail='Game not found')


# Dictionary validation REST endpoint
@app.get('/dict/validate')
async def validate_word(word: str) -> WordCheck:
    return WordCheck(word=word.strip().upper(), valid=dict_service.is_valid(word))


# Socket.IO Events
@sio.event
async def connect(sid, environ, auth):
    await sio.save_session(sid, {})
    await sio.emit('pong', to=sid)


@sio.event
async def disconnect(sid):
    sess = await sio.get_session(sid) or {}
    game_id = sess.get('game_id')
    if game_id:
        await games.remove(game_id)


@sio.on('ping')
async def on_ping(sid):
    await sio.emit('pong', to=sid)


@sio.on('game:new')
async def new_game(sid, payload=None):
    try:
        request = NewGameRequest.model_validate(payload or {})
    except ValidationError as e:
        await sio.emit('game:error', { 'message': 'Invalid request', 'detail': str(e) }, to=sid)
        return
    sess = await sio.get_session(sid) or {}
    previous = sess.pop('game_id', None)
    if previous:
        await games.remove(previous)
        await sio.leave_room(sid, previous)
        await sio.save_session(sid, sess)

    # Join the room first so the initial state reaches this client
    game_id = uuid.uuid4().hex
    await sio.enter_room(sid, game_id)
    try:
        await games.new_game(game_id, letters=request.letters, seed=request.seed)
    except ValueError as e:
        await sio.leave_room(sid, game_id)
        await sio.emit('game:error', { 'message': str(e) }, to=sid)
        return
    await sio.save_session(sid, { **sess, 'game_id': game_id })


@sio.on('game:submit')
async def submit(sid, payload):
    sess = await sio.get_session(sid)
    game_id = sess.get('game_id') if sess else None
    if not game_id:
        return
    try:
        request = SubmitRequest.model_validate(payload if isinstance(payload, dict) else { 'word': payload })
    except ValidationError as e:
        await sio.emit('game:error', { 'message': 'Invalid request', 'detail': str(e) }, to=sid)
        return
    try:
        result = await games.submit(game_id, request.word)
    except KeyError:
        await sio.emit('game:error', { 'message': 'Game not found' }, to=sid)
        return
    # Emit result back to the sender only
    await sio.emit('game:submitResult', result.model_dump(), to=sid)


# Export ASGI app for uvicorn
application = asgi_app

# For local running: uvicorn wordzapp.main:application --reload --host 0.0.0.0 --port 8000

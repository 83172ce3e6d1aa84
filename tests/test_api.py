"""
Tests for the REST endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from wordzapp.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def game(client):
    response = client.post('/games', json={'letters': 'AERTSNLO'})
    assert response.status_code == 200
    return response.json()


def test_config(client):
    body = client.get('/config').json()

    assert body == {
        'letterCount': 8,
        'minWordLength': 3,
        'wordLimit': 8,
        'timeLimit': 120,
        'submissionCap': 10,
        'zapInterval': 10.0,
        'zapJitter': 15.0,
    }


def test_create_game(game):
    assert game['letters'] == list('AERTSNLO')
    assert game['status'] == 'active'
    assert game['submitted'] == []
    assert game['timeLeft'] == 120
    assert not game['locked']


def test_create_random_game(client):
    response = client.post('/games')
    assert response.status_code == 200

    letters = response.json()['letters']
    assert len(set(letters)) == 8


def test_create_game_bad_letters(client):
    response = client.post('/games', json={'letters': 'AAB'})
    assert response.status_code == 422


def test_submit_words(client, game):
    url = f"/games/{game['id']}/words"

    first = client.post(url, json={'word': 'rats'}).json()
    again = client.post(url, json={'word': 'RATS'}).json()
    bad = client.post(url, json={'word': 'cat'}).json()
    short = client.post(url, json={'word': 'no'}).json()

    assert first['ok'] and first['submitted'] == ['RATS']
    assert again['error'] == 'AlreadySubmitted'
    assert bad['error'] == 'InvalidLetters'
    assert short['error'] == 'TooShort'

    state = client.get(f"/games/{game['id']}").json()
    assert state['submitted'] == ['RATS']
    assert state['tally'] == 1


def test_unknown_game(client):
    assert client.get('/games/nope').status_code == 404
    assert client.post('/games/nope/words', json={'word': 'rats'}).status_code == 404


def test_validate_word(client):
    assert client.get('/dict/validate', params={'word': 'stare'}).json() == {'word': 'STARE', 'valid': True}
    assert client.get('/dict/validate', params={'word': 'zzzz'}).json()['valid'] is False

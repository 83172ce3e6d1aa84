"""
Tests for the dictionary service.
"""

import asyncio
import logging

import pytest

from wordzapp.dictionary import DEFAULT_WORDS, DictionaryService, load_words


@pytest.fixture
def word_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("apple\n  Banana \n\ncherry\r\n", encoding="utf-8")
    return path


def test_load_words_normalizes(word_file):
    assert load_words(word_file) == {"APPLE", "BANANA", "CHERRY"}


def test_load_words_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_words(tmp_path / "missing.txt")


def test_defaults():
    service = DictionaryService()
    assert len(service) == len(DEFAULT_WORDS)
    assert "RATS" in service
    assert "STARE" in service


def test_is_valid_is_case_insensitive():
    service = DictionaryService({"stare"})

    assert service.is_valid("STARE")
    assert service.is_valid("stare")
    assert "Stare" in service
    assert not service.is_valid("")
    assert 42 not in service


def test_load_file_replaces_words(word_file):
    service = DictionaryService()

    assert service.load_file(word_file) == 3
    assert "BANANA" in service
    assert "RATS" not in service


def test_load_file_missing_keeps_words(tmp_path, caplog):
    service = DictionaryService({"RATS"})

    with caplog.at_level(logging.WARNING):
        assert service.load_file(tmp_path / "missing.txt") == 1

    assert "RATS" in service
    assert "not found" in caplog.text


def test_load_file_without_path_keeps_words():
    service = DictionaryService({"RATS"})
    assert service.load_file(None) == 1


def test_async_load(word_file):
    service = DictionaryService()

    count = asyncio.run(service.load(word_file))

    assert count == 3
    assert "CHERRY" in service

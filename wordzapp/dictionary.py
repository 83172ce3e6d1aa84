from __future__ import annotations
import asyncio
import logging
from pathlib import Path
from typing import Iterable, Optional, Set, Union

logger = logging.getLogger(__name__)

# Minimal word list for development/demo.
# In production, point WORDZAPP_DICTIONARY at a full newline-delimited list.

DEFAULT_WORDS = {
    'ALE','ANT','ARE','ART','ATE','EAR','EAT','ERA','ETA','LAT','LEA','LET','NET','NOR','NOT',
    'OAR','OAT','ONE','ORE','RAN','RAT','ROT','SAT','SEA','SET','SON','TAN','TAR','TEA','TEN',
    'TOE','TON','LOT','SOT','TOR',
    'EAST','LANE','LATE','LEAN','LOAN','LOST','NOTE','RATE','RATS','REST','ROLE','SALT','SEAL',
    'SLAT','SNORE','STAR','STARE','STONE','TALE','TEAR','TONE','TORN','ALERT','ALTER','LATER',
    'RATES','STEAL','TALES','TEARS','ALONE','NOTES','ONSET','STOLEN','ORNATE','TALONS',
}

PathLike = Union[str, Path]


def load_words(path: PathLike) -> Set[str]:
    """
    Read a newline-delimited word list.

    Words are trimmed and uppercased; blank lines are skipped.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'Word list file not found: {path}')

    words: Set[str] = set()
    with path.open('r', encoding='utf-8', errors='ignore') as f:
        for line in f:
            w = line.strip().upper()
            if w:
                words.add(w)
    return words


class DictionaryService:
    def __init__(self, words: Optional[Iterable[str]] = None):
        # Store uppercase words
        self._words: Set[str] = {w.upper() for w in (words or DEFAULT_WORDS)}

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_valid(word)

    def __len__(self) -> int:
        return len(self._words)

    def is_valid(self, word: str) -> bool:
        if not word:
            return False
        return word.strip().upper() in self._words

    def load_file(self, path: Optional[PathLike]) -> int:
        if path is None:
            logger.warning('No dictionary path configured, using %s default words', len(self._words))
            return len(self._words)
        try:
            words = load_words(path)
        except FileNotFoundError:
            logger.warning('%s not found, using %s default words', path, len(self._words))
            return len(self._words)
        self._words = words
        logger.info('Loaded %s words from %s', len(words), path)
        return len(words)

    async def load(self, path: Optional[PathLike]) -> int:
        return await asyncio.to_thread(self.load_file, path)


# Singleton instance
service = DictionaryService()

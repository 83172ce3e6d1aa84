from __future__ import annotations
import os
import string

LETTER_COUNT = 8
MIN_WORD_LENGTH = 3
WORD_LIMIT = 8
TIME_LIMIT = 120  # seconds

# Secondary hard cap, checked by the countdown independently of WORD_LIMIT
SUBMISSION_CAP = 10

# Finished games kept for lookups before they are released
FINISHED_GAMES_KEPT = 100

TICK_INTERVAL = 1.0  # seconds
ZAP_INTERVAL = 10.0  # seconds
ZAP_JITTER = 15.0  # extra 0-15s per firing

VOWELS = ('A', 'E', 'I', 'O', 'U')
ALPHABET = tuple(string.ascii_uppercase)

# Environment configuration
DICTIONARY_PATH = os.getenv('WORDZAPP_DICTIONARY')
ALLOWED_ORIGINS = os.getenv('ALLOWED_ORIGINS', '*').split(',')

"""Phoneme lexer: Latin letters -> consonant, vowel and separator events.

The lexer is a small state machine. Each call to ``step`` takes one
character (or ``END``) and returns the next state plus the phonemes it
produced. Lookahead is held in the state, never re-read: a lookahead
character that does not complete a cluster is re-dispatched to the
following state.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from emone.types import (
    Consonant,
    Diphthong,
    Error,
    Newline,
    Phoneme,
    Space,
    Vowel,
)

logger = logging.getLogger(__name__)

# End-of-input marker.
END = None

VOWELS = frozenset("eiyaou")
GLIDES = frozenset("wy")
NEWLINES = frozenset("\n\r")
WHITESPACE = frozenset(" \t\n\r")

# Letters that are always a consonant on their own.
SIMPLE_CONSONANTS = frozenset("rlmvfjz")

# First letter -> {second letter: consonant the pair stands for}.
DIGRAPHS: dict[str, dict[str, str]] = {
    "g": {"h": "gh"},
    "k": {"h": "kh"},
    "c": {"h": "ch"},
    "n": {"g": "ng"},
    "b": {"h": "v"},
    "p": {"h": "f"},
    "t": {"h": "th", "s": "ts"},
    "d": {"h": "dh", "j": "dj", "z": "dz"},
    "s": {},
}

# Consonant a digraph-capable letter stands for when alone.
_ALONE = {"c": "k"}


class Mode(Enum):
    FAVOR_CONSONANT = "favor consonant"
    FAVOR_VOWEL = "favor vowel"
    MAYBE_DIPHTHONG = "maybe diphthong"
    SPACE = "space"
    DIGRAPH = "digraph"
    AFTER_Q = "after q"
    AFTER_SC = "after sc"
    DONE = "done"


@dataclass(frozen=True)
class LexerState:
    """Lexer mode plus the letter held for lookahead, if any."""
    mode: Mode
    held: str = ""


START = LexerState(Mode.FAVOR_CONSONANT)


def _favor(mode: Mode, char: str | None) -> tuple[LexerState, list[Phoneme]]:
    """FavorConsonant and FavorVowel differ only in how they read w and y."""
    if char is END:
        return LexerState(Mode.DONE), []
    if char in NEWLINES:
        return LexerState(Mode.SPACE), [Newline()]
    if char == " ":
        return LexerState(Mode.SPACE), [Space()]
    if char in GLIDES:
        if mode is Mode.FAVOR_VOWEL:
            return LexerState(Mode.MAYBE_DIPHTHONG, char), []
        return LexerState(Mode.FAVOR_VOWEL), [Consonant(char)]
    if char in VOWELS:
        return LexerState(Mode.MAYBE_DIPHTHONG, char), []
    if char == "x":
        return START, [Consonant("k"), Consonant("s")]
    if char == "q":
        return LexerState(Mode.AFTER_Q), []
    if char in SIMPLE_CONSONANTS:
        return LexerState(Mode.FAVOR_VOWEL), [Consonant(char)]
    if char in DIGRAPHS:
        return LexerState(Mode.DIGRAPH, char), []
    return LexerState(Mode.FAVOR_VOWEL), [Error(f"unexpected {char}")]


def _then(
    emitted: list[Phoneme],
    state: LexerState,
    char: str | None,
) -> tuple[LexerState, list[Phoneme]]:
    """Emit phonemes, then re-dispatch an unconsumed lookahead character."""
    state, more = step(state, char)
    return state, emitted + more


def step(state: LexerState, char: str | None) -> tuple[LexerState, list[Phoneme]]:
    """Advance the lexer by one character (or END).

    Returns the next state and the phonemes produced, in order.
    """
    mode = state.mode

    if mode in (Mode.FAVOR_CONSONANT, Mode.FAVOR_VOWEL):
        return _favor(mode, char)

    if mode is Mode.MAYBE_DIPHTHONG:
        first = state.held
        if char == " ":
            return LexerState(Mode.SPACE), [Vowel(first), Space()]
        if char is not END and (char in VOWELS or char == "w"):
            return START, [Diphthong(first, char)]
        return _then([Vowel(first)], START, char)

    if mode is Mode.SPACE:
        if char is not END and char in WHITESPACE:
            return state, []
        return step(START, char)

    if mode is Mode.DIGRAPH:
        first = state.held
        if first == "s" and char == "c":
            return LexerState(Mode.AFTER_SC), []
        pair = DIGRAPHS[first].get(char) if char is not END else None
        if pair is not None:
            return LexerState(Mode.FAVOR_VOWEL), [Consonant(pair)]
        alone = Consonant(_ALONE.get(first, first))
        return _then([alone], LexerState(Mode.FAVOR_VOWEL), char)

    if mode is Mode.AFTER_Q:
        kw = [Consonant("k"), Consonant("w")]
        if char in ("u", "w"):
            return LexerState(Mode.FAVOR_VOWEL), kw
        return _then(kw, LexerState(Mode.FAVOR_VOWEL), char)

    if mode is Mode.AFTER_SC:
        if char == "h":
            return LexerState(Mode.FAVOR_VOWEL), [Consonant("sh")]
        return _then([Consonant("s"), Consonant("k")], LexerState(Mode.FAVOR_VOWEL), char)

    # DONE absorbs anything fed after the end marker.
    return state, []


class Lexer:
    """Incremental lexer: feed characters, then finish."""

    def __init__(self):
        self.state = START

    def feed(self, char: str) -> list[Phoneme]:
        self.state, phonemes = step(self.state, char)
        return phonemes

    def finish(self) -> list[Phoneme]:
        """Feed the end marker, flushing any held lookahead."""
        self.state, phonemes = step(self.state, END)
        return phonemes


def lex(text: str) -> list[Phoneme]:
    """Convert a lowercase string to its full phoneme sequence."""
    lexer = Lexer()
    phonemes: list[Phoneme] = []
    for char in text:
        phonemes.extend(lexer.feed(char))
    phonemes.extend(lexer.finish())
    errors = sum(1 for p in phonemes if isinstance(p, Error))
    if errors:
        logger.debug(f"Lexed {len(text)} characters with {errors} unexpected")
    return phonemes

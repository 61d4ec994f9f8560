"""Morse code lookup table and text conversion helpers."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

LOGGER = logging.getLogger(__name__)

WORD_SEPARATOR = "/"
LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
SYMBOLS = LETTERS + DIGITS + " "

_VALID_MORSE_CHARACTERS = frozenset(".- ")

MORSE_TABLE: Mapping[str, str] = {
    "A": ".-",
    "B": "-...",
    "C": "-.-.",
    "D": "-..",
    "E": ".",
    "F": "..-.",
    "G": "--.",
    "H": "....",
    "I": "..",
    "J": ".---",
    "K": "-.-",
    "L": ".-..",
    "M": "--",
    "N": "-.",
    "O": "---",
    "P": ".--.",
    "Q": "--.-",
    "R": ".-.",
    "S": "...",
    "T": "-",
    "U": "..-",
    "V": "...-",
    "W": ".--",
    "X": "-..-",
    "Y": "-.--",
    "Z": "--..",
    "0": "-----",
    "1": ".----",
    "2": "..---",
    "3": "...--",
    "4": "....-",
    "5": ".....",
    "6": "-....",
    "7": "--...",
    "8": "---..",
    "9": "----.",
    " ": WORD_SEPARATOR,
}


class UnknownSymbolError(KeyError):
    """Raised when a character has no Morse pattern."""


def pattern_for(symbol: str) -> str:
    """Return the Morse pattern for a single *symbol*.

    Lower case letters are accepted. Anything outside A-Z, 0-9 and space
    raises :class:`UnknownSymbolError`.
    """

    try:
        return MORSE_TABLE[symbol.upper()]
    except KeyError:
        raise UnknownSymbolError(symbol) from None


def unsupported_characters(text: str) -> List[str]:
    """Return the characters of *text* that :func:`encode` would drop."""

    return [character for character in text if character.upper() not in MORSE_TABLE]


def encode(text: str) -> str:
    patterns: List[str] = []
    skipped: List[str] = []
    for character in text.upper():
        pattern = MORSE_TABLE.get(character)
        if pattern is None:
            skipped.append(character)
            continue
        patterns.append(pattern)
    if skipped:
        LOGGER.debug("Skipping characters without a Morse pattern: %r", "".join(skipped))
    return " ".join(patterns)


def decode(pattern: str) -> Optional[str]:
    """Return the symbol whose pattern equals *pattern* exactly.

    Only a single symbol is matched; ``".... ."`` is not a symbol and yields
    ``None``.
    """

    wanted = pattern.strip()
    for symbol in SYMBOLS:
        if MORSE_TABLE[symbol] == wanted:
            return symbol
    return None


def is_valid_morse_text(text: str) -> bool:
    return all(character in _VALID_MORSE_CHARACTERS for character in text)


__all__ = [
    "DIGITS",
    "LETTERS",
    "MORSE_TABLE",
    "SYMBOLS",
    "UnknownSymbolError",
    "WORD_SEPARATOR",
    "decode",
    "encode",
    "is_valid_morse_text",
    "pattern_for",
    "unsupported_characters",
]

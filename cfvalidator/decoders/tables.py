"""Fixed lookup tables for the Italian codice fiscale.

Month letters, omocodia substitutions and the odd/even check-character
values. Built once at import time and exposed read-only.

Reference: DPR 605/1973, Decreto MEF 12/03/1974, Decreto MEF 23/12/1976 (omocodia).
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MONTH_MAP: Mapping[str, int] = MappingProxyType({
    "A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "H": 6,
    "L": 7, "M": 8, "P": 9, "R": 10, "S": 11, "T": 12,
})

# Omocodia: each digit of the numeric fields may be replaced by a letter
OMOCODIA_DIGIT_TO_LETTER: Mapping[str, str] = MappingProxyType({
    "0": "L", "1": "M", "2": "N", "3": "P", "4": "Q",
    "5": "R", "6": "S", "7": "T", "8": "U", "9": "V",
})

OMOCODIA_LETTER_TO_DIGIT: Mapping[str, str] = MappingProxyType(
    {letter: digit for digit, letter in OMOCODIA_DIGIT_TO_LETTER.items()}
)

# Checksum tables per Decreto MEF 12/03/1974 (1-based positions)
ODD_VALUES: Mapping[str, int] = MappingProxyType({
    "0": 1, "1": 0, "2": 5, "3": 7, "4": 9, "5": 13, "6": 15,
    "7": 17, "8": 19, "9": 21,
    "A": 1, "B": 0, "C": 5, "D": 7, "E": 9, "F": 13, "G": 15,
    "H": 17, "I": 19, "J": 21, "K": 2, "L": 4, "M": 18, "N": 20,
    "O": 11, "P": 3, "Q": 6, "R": 8, "S": 12, "T": 14, "U": 16,
    "V": 10, "W": 22, "X": 25, "Y": 24, "Z": 23,
})

EVEN_VALUES: Mapping[str, int] = MappingProxyType({
    "0": 0, "1": 1, "2": 2, "3": 3, "4": 4, "5": 5, "6": 6,
    "7": 7, "8": 8, "9": 9,
    "A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5, "G": 6,
    "H": 7, "I": 8, "J": 9, "K": 10, "L": 11, "M": 12, "N": 13,
    "O": 14, "P": 15, "Q": 16, "R": 17, "S": 18, "T": 19, "U": 20,
    "V": 21, "W": 22, "X": 23, "Y": 24, "Z": 25,
})

CHECK_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def month_value(letter: str) -> int | None:
    """Return the month number (1–12) for a CF month letter, or None."""
    return MONTH_MAP.get(letter)


def omocodia_letter_to_digit(letter: str) -> str | None:
    """Return the digit an omocodia letter stands for, or None."""
    return OMOCODIA_LETTER_TO_DIGIT.get(letter.upper())


def omocodia_digit_to_letter(digit: str) -> str | None:
    return OMOCODIA_DIGIT_TO_LETTER.get(digit)


def checksum_value(char: str, odd_position: bool) -> int | None:
    """Return the check-character contribution of ``char``.

    Args:
        char: A single uppercase character.
        odd_position: Whether the character sits at an odd 1-based position.

    Returns:
        The table value, or None if the character is not in the table.
    """
    table = ODD_VALUES if odd_position else EVEN_VALUES
    return table.get(char)


def deomocode(text: str) -> str:
    """Replace omocodia letters (L–V) with their digits, leaving the rest intact."""
    return "".join(omocodia_letter_to_digit(ch) or ch for ch in text)

"""Italian Codice Fiscale (CF) validator.

Pure Python, no I/O. Checks a 16-character tax code field by field and
reports every check, passing or failing, so the caller sees the full picture.

CF format: AAABBB 00C00 D000 E
  - AAA:  surname consonants (then vowels, then X)
  - BBB:  name consonants (then vowels, then X)
  - 00:   year of birth (last 2 digits)
  - C:    month of birth (letter A–T, non-sequential)
  - 00:   day of birth (1–31 male, 41–71 female)
  - D000: birthplace code (codice catastale / Belfiore, Z*** = foreign country)
  - E:    check character

Any digit of the year, day and birthplace fields may be replaced by an
omocodia letter (L–V) to disambiguate colliding codes.

Reference: DPR 605/1973, Decreto MEF 12/03/1974.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from cfvalidator.decoders.tables import CHECK_CHARS, checksum_value, deomocode, month_value
from cfvalidator.schemas.validation import Gender, ValidationResult

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CF_LENGTH = 16

_CF_PATTERN = re.compile(r"^[A-Z]{6}[0-9L-V]{2}[A-Z][0-9L-V]{2}[A-Z0-9]{4}[A-Z]$")

# Optional sign followed by decimal digits of any script
_INT_PATTERN = re.compile(r"[+-]?\d+")

FOREIGN_PREFIX = "Z"
FEMALE_DAY_OFFSET = 40


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_cf(raw: str) -> str:
    """Trim surrounding whitespace and uppercase."""
    return raw.strip().upper()


def _parse_int(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    return int(text)


def compute_check_char(first15: str) -> str | None:
    """Compute the check character over the first 15 characters of a CF.

    Returns:
        The expected letter A–Z, or None if a character is outside the
        odd/even tables (the check character is then unresolvable).
    """
    total = 0
    for i, char in enumerate(first15[:15]):
        value = checksum_value(char.upper(), odd_position=(i % 2 == 0))  # 1-based odd
        if value is None:
            return None
        total += value
    return CHECK_CHARS[total % 26]


def validate_cf_format(cf: str) -> bool:
    """Check that the CF matches the 16-character pattern (omocodia allowed)."""
    return bool(_CF_PATTERN.fullmatch(normalize_cf(cf)))


def validate_cf_checksum(cf: str) -> bool:
    """Validate the check character (position 16) of a codice fiscale."""
    cf = normalize_cf(cf)
    if len(cf) != CF_LENGTH:
        return False
    return compute_check_char(cf[:15]) == cf[15]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_codice_fiscale(cf: str, municipalities: Mapping[str, str]) -> ValidationResult:
    """Validate a normalized codice fiscale.

    Every check runs even if an earlier one failed; only a wrong length
    stops validation, since all other checks read fixed offsets.

    Args:
        cf: The candidate code, already trimmed and uppercased.
        municipalities: Read-only catastral code → place name mapping.

    Returns:
        ValidationResult with the verdict, one message per check, and
        whatever fields could be decoded.
    """
    if len(cf) != CF_LENGTH:
        return ValidationResult(
            valid=False,
            codice_fiscale=cf,
            messages=[f"length invalid: expected {CF_LENGTH} characters, got {len(cf)}"],
        )

    messages: list[str] = []

    # Format
    format_ok = bool(_CF_PATTERN.fullmatch(cf))
    messages.append("format valid" if format_ok else "format invalid (pattern mismatch)")

    # Month (position 8)
    month_char = cf[8]
    month = month_value(month_char)
    if month is None:
        messages.append(f"month letter invalid: {month_char}")
    else:
        messages.append(f"month valid: {month_char} -> {month}")

    # Day and gender (positions 9–10), omocodia allowed
    day_digits = deomocode(cf[9:11])
    day_raw = _parse_int(day_digits)
    day: int | None = None
    gender: Gender | None = None
    if day_raw is None:
        messages.append(f"day not numeric after omocodia normalization: {day_digits}")
    elif 1 <= day_raw <= 31:
        day, gender = day_raw, Gender.MALE
        messages.append(f"day valid (male): {day}")
    elif 1 + FEMALE_DAY_OFFSET <= day_raw <= 31 + FEMALE_DAY_OFFSET:
        day, gender = day_raw - FEMALE_DAY_OFFSET, Gender.FEMALE
        messages.append(f"day valid (female): {day}")
    else:
        messages.append(f"day out of valid range: {day_raw}")

    # Birthplace (positions 11–14), omocodia allowed on the last three
    cat_raw = cf[11:15]
    cat_norm = (cat_raw[0] + deomocode(cat_raw[1:])).upper()
    foreign = cat_raw[0] == FOREIGN_PREFIX
    place_name = None if foreign else municipalities.get(cat_norm)
    if foreign:
        messages.append(f"foreign code, dataset check not applicable: raw={cat_raw}")
    elif place_name is not None:
        messages.append(
            f"municipality code found in dataset: raw={cat_raw}, "
            f"normalized={cat_norm}, name={place_name}"
        )
    else:
        messages.append(
            f"municipality code not found in dataset: raw={cat_raw}, normalized={cat_norm}"
        )

    # Check character (position 15)
    expected = compute_check_char(cf[:15])
    found = cf[15]
    if expected is None:
        messages.append(
            "check character unresolvable: invalid character in the first 15 positions, "
            f"found {found}"
        )
    elif expected == found:
        messages.append(f"check character valid: {found}")
    else:
        messages.append(f"check character mismatch: expected {expected}, found {found}")

    valid = (
        format_ok
        and month is not None
        and day is not None
        and (foreign or place_name is not None)
        and expected == found
    )
    logger.debug("Validated %s: valid=%s", cf[:6] + "*" * 10, valid)

    return ValidationResult(
        valid=valid,
        codice_fiscale=cf,
        messages=messages,
        month=month,
        day=day,
        gender=gender,
        birthplace_code=cat_norm,
        birthplace_name=place_name,
        foreign_birthplace=foreign,
        expected_check=expected,
        found_check=found,
    )


def validate(raw: str, municipalities: Mapping[str, str]) -> ValidationResult:
    """Normalize raw user input, then validate it."""
    return validate_codice_fiscale(normalize_cf(raw), municipalities)

"""Per-label value parsing for the rikishi profile table."""

import re
import unicodedata
from datetime import datetime

from rikishidata.util import DateParseError, NumberParseError, PatternMismatchError

# ASCII digits only; full-width numerals are a mismatch
_BIRTH_DATE_PATTERN = re.compile(r"(\w+ \d+, \d{4}) \(\d+ years\)", re.ASCII)
_HEIGHT_WEIGHT_PATTERN = re.compile(r"(\d+) cm (\d+) kg", re.ASCII)
_FIRST_BASHO_PATTERN = re.compile(r"(\d{4}\.\d{2})", re.ASCII)
_SLUG_SEPARATOR = re.compile(r"[^a-z0-9]+")

BIRTH_DATE_FORMAT = "%B %d, %Y"  # January 2, 2006

# Row label -> record field, for rows copied as lowercase text
_TEXT_FIELDS = {
    "Real Name": "real_name",
    "Shusshin": "origin",
    "University": "university",
    "Heya": "heya",
    "Shikona": "shikona",
}


def slugify(text: str) -> str:
    """Lowercase, ASCII-folded, hyphen-separated form of ``text``.

    ``slugify("Ōzeki 1 East") == "ozeki-1-east"``; applying it twice is a no-op.
    """
    normalized = unicodedata.normalize("NFKD", text)
    folded = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return _SLUG_SEPARATOR.sub("-", folded.lower()).strip("-")


def extract_field(label: str, value: str, rid: int | None = None) -> dict:
    """Parse one profile row into a partial record update.

    Returns a mapping of record field names to values. Unknown labels give an
    empty mapping. Rows with a recognized label but a malformed value raise a
    FieldError subclass carrying ``rid`` for context.
    """
    if label == "Highest Rank":
        return {"highest_rank": slugify(value)}

    if label in _TEXT_FIELDS:
        return {_TEXT_FIELDS[label]: value.lower()}

    if label == "Birth Date":
        return {"birth_date": _parse_birth_date(label, value, rid)}

    if label == "Height and Weight":
        return _parse_height_weight(label, value, rid)

    if label == "Hatsu Dohyo":
        m = _FIRST_BASHO_PATTERN.match(value.lstrip())
        if not m:
            raise PatternMismatchError(
                f"unable to match first basho in {value!r}.",
                label=label, value=value, rid=rid,
            )
        return {"first_basho": m.group(1)}

    return {}


def _parse_birth_date(label: str, value: str, rid: int | None):
    m = _BIRTH_DATE_PATTERN.search(value)
    if not m:
        raise PatternMismatchError(
            f"unable to match birth date in {value!r}.",
            label=label, value=value, rid=rid,
        )
    try:
        return datetime.strptime(m.group(1), BIRTH_DATE_FORMAT).date()
    except ValueError as e:
        raise DateParseError(
            f"invalid birth date {m.group(1)!r}: {e}.",
            label=label, value=value, rid=rid,
        ) from e


def _parse_height_weight(label: str, value: str, rid: int | None) -> dict:
    m = _HEIGHT_WEIGHT_PATTERN.search(value)
    if not m:
        raise PatternMismatchError(
            f"unable to match height and weight in {value!r}.",
            label=label, value=value, rid=rid,
        )
    try:
        height = int(m.group(1))
        weight = int(m.group(2))
    except ValueError as e:
        raise NumberParseError(
            f"invalid height or weight in {value!r}: {e}.",
            label=label, value=value, rid=rid,
        ) from e
    return {"height_cm": height, "weight_kg": weight}

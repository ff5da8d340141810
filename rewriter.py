"""Rewrite airport-code and date/time placeholder tokens in itinerary text.

Airport codes use a sigil followed by a code (letters/digits, any length):

    #LAX     -> airport name by IATA code
    ##KLAX   -> airport name by ICAO code
    *#LAX    -> city name by IATA code
    *##KLAX  -> city name by ICAO code

Dates and times wrap an ISO-8601 offset date-time:

    D(2024-03-01T10:00:00-08:00)    -> 01 Mar 2024
    T12(2024-03-01T10:00:00-08:00)  -> 10:00AM (-08:00)
    T24(2024-03-01T22:05:00Z)       -> 22:05 (+00:00)

Anything that does not resolve (unknown code, unparseable date) is left as-is.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Callable, Iterator, NamedTuple

from config import MONTH_ABBREVIATIONS
from lookup import AirportTable


class TokenKind(Enum):
    IATA_CODE = "iata_code"
    ICAO_CODE = "icao_code"
    IATA_CITY_CODE = "iata_city_code"
    ICAO_CITY_CODE = "icao_city_code"
    DATE = "date"
    TIME12 = "time12"
    TIME24 = "time24"


class Token(NamedTuple):
    kind: TokenKind
    raw: str
    payload: str


# Longest sigil first so "*##" is never read as "*#" + "#..."
_SIGILS: list[tuple[str, TokenKind]] = [
    ("*##", TokenKind.ICAO_CITY_CODE),
    ("*#", TokenKind.IATA_CITY_CODE),
    ("##", TokenKind.ICAO_CODE),
    ("#", TokenKind.IATA_CODE),
]

_CODE_LOOKUP: dict[TokenKind, tuple[str, bool]] = {
    # kind -> (table kind, city?)
    TokenKind.IATA_CODE: ("iata", False),
    TokenKind.ICAO_CODE: ("icao", False),
    TokenKind.IATA_CITY_CODE: ("iata", True),
    TokenKind.ICAO_CITY_CODE: ("icao", True),
}


def _match_sigil(text: str, pos: int) -> tuple[str, TokenKind] | None:
    for sigil, kind in _SIGILS:
        if text.startswith(sigil, pos):
            return sigil, kind
    return None


def _extract_code(text: str, start: int) -> str:
    """Maximal run of letters/digits starting at start (may be empty)."""
    end = start
    while end < len(text) and (text[end].isalpha() or text[end].isdecimal()):
        end += 1
    return text[start:end]


def _scan(text: str) -> Iterator[str | Token]:
    """Yield plain-text chunks and code tokens in order."""
    pos = 0
    plain_start = 0
    while pos < len(text):
        found = _match_sigil(text, pos) if text[pos] in "#*" else None
        if found is None:
            pos += 1
            continue
        sigil, kind = found
        if plain_start < pos:
            yield text[plain_start:pos]
        code = _extract_code(text, pos + len(sigil))
        yield Token(kind, sigil + code, code)
        pos += len(sigil) + len(code)
        plain_start = pos
    if plain_start < len(text):
        yield text[plain_start:]


def scan_codes(text: str) -> list[Token]:
    """Return the airport-code tokens found in text, left to right."""
    return [part for part in _scan(text) if isinstance(part, Token)]


def resolve_code(token: Token, table: AirportTable) -> str:
    table_kind, city = _CODE_LOOKUP[token.kind]
    if city:
        replacement = table.city_name(token.payload, table_kind)
    else:
        replacement = table.airport_name(token.payload, table_kind)
    return replacement if replacement is not None else token.raw


def rewrite_codes(line: str, table: AirportTable) -> str:
    """Replace #, ##, *# and *## code tokens with names from the table."""
    parts = []
    for part in _scan(line):
        parts.append(resolve_code(part, table) if isinstance(part, Token) else part)
    return "".join(parts)


# ---------------------------------------------------------------------------
# Dates and times
# ---------------------------------------------------------------------------

# ASCII digits only; fromisoformat does the range checks
_ISO_RE = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})"
    r"T(?P<hhmm>\d{2}:\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,9}))?)?"
    r"(?P<offset>Z|[+-](?P<off_hours>\d{2}):(?P<off_minutes>\d{2}))",
    re.ASCII,
)


def parse_offset_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 offset date-time (offset required); None if invalid."""
    m = _ISO_RE.fullmatch(value)
    if not m:
        return None
    if m.group("off_hours") is not None:
        hours, minutes = int(m.group("off_hours")), int(m.group("off_minutes"))
        if hours > 18 or minutes > 59 or (hours == 18 and minutes):
            return None

    # Seconds and a 6-digit fraction are always present for fromisoformat
    second = m.group("second") or "00"
    fraction = (m.group("fraction") or "")[:6].ljust(6, "0")
    offset = m.group("offset").replace("Z", "+00:00")
    try:
        dt = datetime.fromisoformat(f"{m.group('date')}T{m.group('hhmm')}:{second}.{fraction}{offset}")
    except ValueError:
        return None
    if dt.tzinfo is None:
        return None
    return dt


def format_offset(dt: datetime) -> str:
    """UTC offset as +HH:MM (zero offset is +00:00, never Z)."""
    total = int(dt.utcoffset().total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_date(dt: datetime) -> str:
    return f"{dt.day:02d} {MONTH_ABBREVIATIONS[dt.month - 1]} {dt.year:04d}"


def format_time12(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{hour:02d}:{dt.minute:02d}{meridiem} ({format_offset(dt)})"


def format_time24(dt: datetime) -> str:
    return f"{dt.hour:02d}:{dt.minute:02d} ({format_offset(dt)})"


# Applied in this order, each sweep over the previous sweep's output
_DATE_TIME_SWEEPS: list[tuple[re.Pattern, Callable[[datetime], str]]] = [
    (re.compile(r"D\(([^)]+)\)"), format_date),
    (re.compile(r"T12\(([^)]+)\)"), format_time12),
    (re.compile(r"T24\(([^)]+)\)"), format_time24),
]


def _sweep(line: str, pattern: re.Pattern, formatter: Callable[[datetime], str]) -> str:
    def replace(m: re.Match) -> str:
        dt = parse_offset_datetime(m.group(1))
        return formatter(dt) if dt is not None else m.group(0)

    return pattern.sub(replace, line)


def rewrite_dates_and_times(line: str) -> str:
    """Replace D(...), T12(...) and T24(...) tokens with formatted text."""
    for pattern, formatter in _DATE_TIME_SWEEPS:
        line = _sweep(line, pattern, formatter)
    return line


def rewrite(line: str, table: AirportTable) -> str:
    """Airport codes first, then dates and times."""
    return rewrite_dates_and_times(rewrite_codes(line, table))

"""Airport lookup table: load a CSV of airports into IATA/ICAO code mappings."""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from config import REQUIRED_COLUMNS


class MalformedLookupError(ValueError):
    """Lookup CSV is missing required columns or contains an invalid row."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class AirportRecord:
    name: str
    city: str


@dataclass(frozen=True)
class AirportTable:
    """Read-only snapshot of the lookup file, split by code kind at load time."""

    iata: Mapping[str, AirportRecord] = field(default_factory=lambda: MappingProxyType({}))
    icao: Mapping[str, AirportRecord] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_records(
        cls,
        iata: dict[str, AirportRecord],
        icao: dict[str, AirportRecord],
    ) -> "AirportTable":
        return cls(iata=MappingProxyType(dict(iata)), icao=MappingProxyType(dict(icao)))

    def _mapping(self, kind: str) -> Mapping[str, AirportRecord]:
        if kind == "iata":
            return self.iata
        elif kind == "icao":
            return self.icao
        raise ValueError(f"Unknown code kind: {kind}")

    def airport_name(self, code: str, kind: str) -> str | None:
        record = self._mapping(kind).get(code)
        return record.name if record else None

    def city_name(self, code: str, kind: str) -> str | None:
        record = self._mapping(kind).get(code)
        return record.city if record else None

    def __len__(self) -> int:
        return len(self.iata) + len(self.icao)


def _header_index(header: list[str]) -> dict[str, int]:
    """Map each required column to its position; raise if any is missing."""
    positions: dict[str, int] = {}
    for i, column in enumerate(header):
        # A repeated column name refers to its last occurrence
        positions[column] = i
    missing = [c for c in REQUIRED_COLUMNS if c not in positions]
    if missing:
        raise MalformedLookupError(f"missing required column(s): {', '.join(missing)}", line=1)
    return {c: positions[c] for c in REQUIRED_COLUMNS}


def _row_values(row: list[str], index: dict[str, int], line: int) -> dict[str, str]:
    """Extract required fields from a data row; every one must be present and non-blank."""
    values: dict[str, str] = {}
    for column, i in index.items():
        if i >= len(row):
            raise MalformedLookupError(f"row has {len(row)} field(s), no value for '{column}'", line=line)
        value = row[i]
        if not value:
            raise MalformedLookupError(f"blank value for '{column}'", line=line)
        values[column] = value
    return values


def split_fields(line: str) -> list[str]:
    """Split a CSV line on commas outside double quotes; quotes removed, fields trimmed."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields


def parse_lookup(lines) -> AirportTable:
    """Build an AirportTable from an iterable of CSV lines (header first)."""
    rows = (line.rstrip("\r\n") for line in lines)
    header = next(rows, None)
    if header is None:
        raise MalformedLookupError("lookup file is empty")
    index = _header_index(split_fields(header))

    iata: dict[str, AirportRecord] = {}
    icao: dict[str, AirportRecord] = {}
    for line_num, line in enumerate(rows, start=2):
        if not line.strip():
            continue
        values = _row_values(split_fields(line), index, line_num)
        record = AirportRecord(name=values["name"], city=values["municipality"])
        # Last row wins on a repeated code
        iata[values["iata_code"]] = record
        icao[values["icao_code"]] = record

    return AirportTable.from_records(iata, icao)


def load_lookup(path: Path | str) -> AirportTable:
    """Load the airport lookup CSV at path. OSError propagates to the caller."""
    with open(path, encoding="utf-8-sig") as f:
        return parse_lookup(f)

"""Shared fixtures: lookup CSV files and a small airport table."""

from __future__ import annotations

from pathlib import Path

import pytest

from lookup import AirportRecord, AirportTable

SEATTLE_CSV = (
    "name,iso_country,municipality,icao_code,iata_code,coordinates\n"
    'Seattle-Tacoma Intl,US,Seattle,KSEA,SEA,"47,-122"\n'
)


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write CSV text to a temp file and return its path."""

    def _write(text: str, name: str = "airport-lookup.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def seattle_csv(write_csv) -> Path:
    return write_csv(SEATTLE_CSV)


@pytest.fixture
def table() -> AirportTable:
    """Three airports, keyed by both IATA and ICAO codes."""
    lax = AirportRecord(name="Los Angeles International Airport", city="Los Angeles")
    sea = AirportRecord(name="Seattle-Tacoma Intl", city="Seattle")
    hel = AirportRecord(name="Helsinki Vantaa Airport", city="Helsinki")
    return AirportTable.from_records(
        iata={"LAX": lax, "SEA": sea, "HEL": hel},
        icao={"KLAX": lax, "KSEA": sea, "EFHK": hel},
    )


@pytest.fixture
def empty_table() -> AirportTable:
    return AirportTable()

"""Configuration constants for itinerary prettifying."""

ENCODING = "utf-8"

# Lookup CSV: columns every file must carry (order irrelevant, extras allowed)
REQUIRED_COLUMNS = ("name", "municipality", "icao_code", "iata_code")

# Fixed English month table for D(...) tokens
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Terminal output
RESET = "\033[0m"
GREEN = "\033[0;32m"
YELLOW = "\033[0;33m"
RED = "\033[0;31m"

BANNER = """\
 ____  ____  ____  ____  ____  ____  ____  ____  ____  ____
|    ||    ||    ||    ||    ||    ||    ||    ||    ||    |
| P  || R  || E  || T  || T  || I  || F  || I  || E  || R  |
|____||____||____||____||____||____||____||____||____||____|
"""

USAGE_EXAMPLE = "prettify ./input.txt ./output.txt ./airport-lookup.csv"

# Environment overrides (read after load_dotenv in prettify.py)
QUIET_ENV = "PRETTIFIER_QUIET"
NO_COLOR_ENV = "NO_COLOR"
TRUTHY = ("1", "true", "yes", "on")

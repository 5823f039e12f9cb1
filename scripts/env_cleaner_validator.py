# scripts/env_cleaner_validator.py
"""
Turns .env.example into a .env and checks that the result would let
create_app start: required keys present, reference zone resolvable,
designated prayer known.
"""
import os
import sys
from dotenv import load_dotenv

from prayerclock.services.timetable.errors import UnknownTimezone
from prayerclock.services.timetable.models import PRAYER_NAMES
from prayerclock.services.timetable.zones import resolve_timezone

REQUIRED_KEYS = [
    "FLASK_CONFIG",
    "SECRET_KEY",
    "PRAYER_API_ADAPTER",
    "PRAYER_API_BASE_URL",
    "REFERENCE_TIMEZONE",
]

# Keys that must parse as integers when they are set.
INTEGER_KEYS = ["PRAYER_API_TIMEOUT", "UPSTREAM_MAX_WORKERS", "DEFAULT_CALCULATION_METHOD_ID"]


def clean_env_file(source_path=".env.example", output_path=".env"):
    """Keeps KEY=VALUE lines that carry a value; comments, blanks and empty keys are dropped."""
    kept = []
    with open(source_path, "r", encoding="utf-8") as f:
        for raw_line in f:
            key, sep, value = raw_line.strip().partition("=")
            key, value = key.strip(), value.strip()
            if not sep or not key or key.startswith("#") or not value:
                continue
            kept.append(f"{key}={value}")

    with open(output_path, "w", encoding="utf-8") as out:
        out.write("\n".join(kept))
    print(f"'{output_path}' written with {len(kept)} keys from '{source_path}'.")
    return kept


def find_invalid_values():
    """
    Checks the values create_app and the services rely on.
    Returns {key: reason}; an unset optional key is not an error.
    """
    invalid = {}

    zone_name = os.getenv("REFERENCE_TIMEZONE")
    if zone_name:
        try:
            resolve_timezone(zone_name, field="REFERENCE_TIMEZONE")
        except UnknownTimezone as e:
            invalid["REFERENCE_TIMEZONE"] = e.message

    designated = os.getenv("DESIGNATED_PRAYER") or "Fajr"
    if designated not in PRAYER_NAMES:
        invalid["DESIGNATED_PRAYER"] = f"'{designated}' is not one of {', '.join(PRAYER_NAMES)}."

    for key in INTEGER_KEYS:
        value = os.getenv(key)
        if value and not value.isdigit():
            invalid[key] = f"'{value}' is not a whole number."

    return invalid


def validate_env(env_path=".env"):
    """Loads `env_path` and returns (missing_keys, invalid_values)."""
    load_dotenv(dotenv_path=env_path)
    print(f"Validating {env_path}...\n")

    missing = [key for key in REQUIRED_KEYS if not os.getenv(key)]
    invalid = find_invalid_values()

    if missing:
        print("Missing keys:", ", ".join(missing))
    for key, reason in invalid.items():
        print(f"Invalid {key}: {reason}")
    if not missing and not invalid:
        print("All required keys present and valid.")
    return missing, invalid


if __name__ == "__main__":
    clean_env_file()
    missing_keys, invalid_values = validate_env()
    sys.exit(1 if missing_keys or invalid_values else 0)

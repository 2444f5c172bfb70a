from datetime import datetime, timezone


def now_iso() -> str:
    """UTC timestamp in the same shape browsers produce: 2025-01-31T09:15:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def today() -> str:
    """UTC calendar day, YYYY-MM-DD"""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def parse_iso(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))

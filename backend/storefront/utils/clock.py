from datetime import datetime, timezone


def iso_now() -> str:
    """UTC now as '2024-01-31T12:00:00.000Z' (what the storefront client parses)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

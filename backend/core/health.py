"""Health-check status used by the API."""

SERVICE_NAME = "compound-interest-calculator"


def get_health_status() -> dict:
    """Return the static liveness payload."""
    return {"status": "ok", "service": SERVICE_NAME}

"""Response error extraction for load test observability.

LuxMall error bodies have the shape `{"message": str, "errors": {field: [str]}}`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    message = body.get("message") or ""
    errors = body.get("errors") or {}
    if errors:
        fields = " | ".join(f"{field}: {', '.join(msgs)}" for field, msgs in errors.items())
        return f"{message} ({fields})" if message else fields
    if message:
        return message

    return str(body)[:300]

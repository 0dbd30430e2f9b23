"""Response parsing for load test observability.

Parses storefront API error responses into human-readable messages and
formats the final inventory report. Error parsing handles three shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- HTTP errors (401): {"detail": "msg"}
- Domain errors (400/404/409/502): {"error": {"field": ["msg", ...]}}
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
        # Not JSON: return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    detail = body.get("detail")
    if isinstance(detail, list):
        parts = []
        for err in detail:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)
    if isinstance(detail, str):
        return detail

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(
                f"{field}: {'; '.join(msgs) if isinstance(msgs, list) else msgs}" for field, msgs in error.items()
            )
        return str(error)

    # Unknown shape: stringify and truncate
    return str(body)[:300]


def format_inventory_report(report: dict) -> list[str]:
    """Render a ``GET /inventory`` body as printable lines, header first."""
    lines = [f"Final inventory ({report.get('critical_count', 0)} critical):"]
    for line in report.get("lines", []):
        lines.append(f"  {line['product_id']:<20} {line['available_quantity']:>6}  {line['status']}")
    return lines

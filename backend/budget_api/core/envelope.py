"""Response Envelope — the {success, data?, error?} wrapper shared by all routes.

Invariants:
    - success=True → body has `data`, never `error`
    - success=False → body has `error`, never `data`
    - GET /project/budget/{id} success bodies bypass the envelope (compatibility)
"""

from typing import Any


def format_response(success: bool, data: Any = None, error: str | None = None) -> dict:
    response: dict[str, Any] = {"success": success}
    if success:
        response["data"] = data
    else:
        response["error"] = error
    return response

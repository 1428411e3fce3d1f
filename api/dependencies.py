"""
FastAPI dependencies for reaching the task store and parsing path parameters
"""
from fastapi import Request
from typing import Optional
import re

from api.services.task_store import TaskStore

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def get_task_store(request: Request) -> TaskStore:
    """
    Return the store owned by the running application.

    The store is created once by create_app() and kept on app.state, so
    every request in the process sees the same collection.
    """
    return request.app.state.task_store


def parse_task_id(raw_id: str) -> Optional[int]:
    """
    Parse a task ID taken from the URL path.

    Leading whitespace and a sign are allowed, and anything after the
    leading digits is ignored ("12abc" -> 12).

    Args:
        raw_id: The path segment as received

    Returns:
        Optional[int]: The parsed ID, or None if it does not start with digits
            or has too many digits to convert
    """
    match = _LEADING_INT.match(raw_id)
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Digit runs past the interpreter's int conversion limit
        return None

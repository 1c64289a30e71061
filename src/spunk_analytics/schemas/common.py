"""Helpers shared by request and event schemas."""

from __future__ import annotations

from typing import Any


def scalar_text(value: Any) -> str | None:
    """Render a JSON scalar the way it appears in a JSON document.

    Booleans become ``"true"``/``"false"`` and integral floats drop their
    fraction, so ``1.0`` and ``1`` produce the same key. Returns None for
    values that are not strings, numbers or booleans.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    return None

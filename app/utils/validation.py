"""Helpers for presenting pydantic validation failures."""

from __future__ import annotations

from typing import Dict, List

import pydantic


def format_validation_errors(exc: pydantic.ValidationError) -> List[Dict[str, str]]:
    """Flatten pydantic errors into ``{field, message}`` pairs."""

    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]

from __future__ import annotations

from typing import Dict, List

from pydantic import ValidationError


def error_map(exc: ValidationError) -> Dict[str, List[str]]:
    """Flatten pydantic errors into ``{"athletes.0.country": ["..."]}``."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        key = ".".join(str(part) for part in error["loc"]) or "base"
        errors.setdefault(key, []).append(error["msg"])
    return errors

"""
Shared helpers for calculator endpoints.
"""

import dataclasses
import logging
import math
from typing import Any, List

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


def reject_invalid(calculator: str, errors: List[str]) -> None:
    """
    Raise a 400 carrying validation messages.

    Calculations are never run on inputs that fail validation.
    """
    if errors:
        logger.info(f"Rejected {calculator} inputs: {'; '.join(errors)}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=errors)


def _finite(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_finite(item) for item in value]
    return value


def to_payload(result: Any) -> Any:
    """
    Convert a result dataclass (or list of them) to JSON-ready data.

    Non-finite floats (a break-even age of "never") become null.
    """
    return _finite(result)

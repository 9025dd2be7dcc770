# statespace_lab/core/errors.py
from __future__ import annotations


class InvalidInputError(ValueError):
    """Problem parameters rejected before any search starts."""

# core/errors.py
from __future__ import annotations
from typing import Iterable, List


class SiteError(Exception):
    """Base class for every error the site reports to a visitor or admin."""


class ValidationError(SiteError):
    """One or more required fields are missing or malformed; nothing was sent to the store."""

    def __init__(self, errors: Iterable[str] | str):
        self.errors: List[str] = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("; ".join(self.errors))


class StoreError(SiteError):
    """The content store or file storage rejected a call."""

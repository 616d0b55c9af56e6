# catalog/errors.py
"""
Exceptions raised by the catalog pipeline.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog pipeline errors"""


class ResolutionError(CatalogError):
    """A vendor show-page URL could not be resolved to a feed URL"""


class ValidationError(CatalogError):
    """Caller-supplied input is malformed or outside its documented range"""


class SourceUnavailable(CatalogError):
    """
    An external source failed, timed out, or had no match.

    Soft failure: the fetch layer logs it and reports "no data" instead of
    propagating it to callers.
    """

    def __init__(self, source: str, reason: str, status: Optional[int] = None):
        self.source = source
        self.reason = reason
        self.status = status
        detail = f" (status {status})" if status is not None else ""
        super().__init__(f"{source}: {reason}{detail}")

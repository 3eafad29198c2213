"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    GEM,
    make_i18n,
    make_localizations,
    make_request,
)

__all__ = [
    "GEM",
    "make_i18n",
    "make_localizations",
    "make_request",
]

"""Deterministic source rewrites applied before the first build."""

from .font_rules import NestedFontQuoteRule
from .icon_rules import MissingIconImportRule


def default_rules() -> list:
    """Pre-build rules in the order they are applied to each file."""
    return [NestedFontQuoteRule(), MissingIconImportRule()]


__all__ = ["MissingIconImportRule", "NestedFontQuoteRule", "default_rules"]

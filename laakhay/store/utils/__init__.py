"""Utility helpers."""

from .etag import parse_marker, quote, unquote

__all__ = ["quote", "unquote", "parse_marker"]

"""Hierarchical exception types for the reelscout pipeline."""

from __future__ import annotations


class ReelscoutError(Exception):
    """Base exception for all reelscout errors."""


# ── Upstream services ──────────────────────────────────────────


class TransportError(ReelscoutError):
    """Network failure, timeout or non-success status from an upstream service."""


class DecodeError(ReelscoutError):
    """Upstream response body was malformed or had an unexpected shape."""


# ── Search ─────────────────────────────────────────────────────


class InvalidRequestError(ReelscoutError):
    """Search arguments were rejected before any request was made."""

"""Presence channel adapters."""

from desk.adapter.presence.local import LocalPresenceChannel

__all__ = ["LocalPresenceChannel"]

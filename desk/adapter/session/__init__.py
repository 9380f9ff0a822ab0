"""Review session store adapters."""

from desk.adapter.session.local import LocalReviewSessionStore

__all__ = ["LocalReviewSessionStore"]

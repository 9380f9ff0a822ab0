"""Strongly typed identifiers for review desk entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
MaterialId = NewType("MaterialId", UUID)
ReviewStateId = NewType("ReviewStateId", UUID)
TagGroupId = NewType("TagGroupId", UUID)
TagId = NewType("TagId", UUID)
CommentId = NewType("CommentId", UUID)
ReviewSessionId = NewType("ReviewSessionId", UUID)

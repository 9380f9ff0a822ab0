"""Domain value objects for the review desk.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from desk.domain.value.common import RootValueObject, ValueObject

# Comments longer than this (after trimming) are rejected
MAX_COMMENT_LENGTH = 5000

# Color given to tags created without one
DEFAULT_TAG_COLOR = "#6B7280"


class MaterialFormat(str, Enum):
    """Format of the content a material points at."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class ExpectedCategory(str, Enum):
    """Disinformation category a material is expected to fall under."""

    UNALTERED = "unaltered"
    DIGITALLY_MANIPULATED = "digitally_manipulated"
    AI_GENERATED = "ai_generated"
    DEEPFAKE = "deepfake"
    TEXTUAL_DISINFORMATION = "textual_disinformation"


class ReviewStateKind(str, Enum):
    """Workflow role of a review state.

    Fixed when the state is created. Display names can change freely
    without affecting the review workflow.
    """

    NORMAL = "normal"
    TRANSIENT = "transient"  # Marks a material as being edited right now
    INITIAL_DEFAULT = "initial_default"  # Fallback for new and recovered materials


class SelectionType(str, Enum):
    """How many tags of a group a reviewer is expected to pick."""

    SINGLE = "single"
    MULTIPLE = "multiple"


class UserRole(str, Enum):
    """Role of a signed-in user."""

    ADMIN = "admin"
    REGULAR = "regular"


class HexColor(RootValueObject[str]):
    """Color in #RRGGBB notation.

    Examples: '#FCD34D', '#6B7280'
    """

    @field_validator("root")
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        """Validate the color is a six digit hex code."""
        if not re.match(r"^#[0-9A-Fa-f]{6}$", v):
            raise ValueError("Color must be a hex code like #RRGGBB")
        return v


class Editor(ValueObject):
    """A reviewer taking part in presence and review sessions.

    Attributes:
        identity: Stable identity of the person (their e-mail)
        key: Presence key of the connection the editor works from
    """

    identity: str
    key: str

"""
Type definitions used across layers
"""

from enum import Enum, StrEnum


class FaceRequirement(StrEnum):
    """Which face of a double-sided tile a cell asks for.

    NONE is not "anything goes": it accepts a tile showing its front or the FACE_B reverse, but never FACE_A.
    """

    NONE = "none"
    FACE_A = "face_a"
    FACE_B = "face_b"


class ValidationStatus(StrEnum):
    EMPTY = "empty"
    INCOMPLETE = "incomplete"
    OVERFULL = "overfull"
    INVALID = "invalid"
    VALID = "valid"


class RotationConvention(Enum):
    """Two sign conventions for turning a grid vector by a quarter turn. Templates were authored under both."""

    COUNTER_CLOCKWISE_POSITIVE = "A"
    CLOCKWISE_POSITIVE = "B"

"""
Segment taxonomy service.

Exposes the seven segment axes and their fixed value sets, and validates
caller-supplied identifiers against them. Pure data, no I/O.

Key Functions:
- list_segments: axis -> ordered list of allowed values (GET /segments)
- get_segment_values: allowed values for one axis
- parse_segment_type: string -> SegmentType, failing fast on unknown axes
- validate_segment: check an (axis, value) pair, failing fast on unknown values
"""

from typing import Dict, List, Tuple, Union

from account_health.core.exceptions import UnknownSegmentTypeError, UnknownSegmentValueError
from account_health.models.enums import SEGMENT_VALUE_ENUMS, SegmentType


# Axis -> ordered tuple of allowed values, derived once from the enums
SEGMENT_VALUES: Dict[SegmentType, Tuple[str, ...]] = {
    segment_type: tuple(member.value for member in value_enum)
    for segment_type, value_enum in SEGMENT_VALUE_ENUMS.items()
}


def list_segments() -> Dict[str, List[str]]:
    """
    Return every segment axis with its allowed values.

    Returns:
        Dict keyed by axis name (e.g. 'experienceLevel') with the values in
        declaration order (e.g. ['rookie', 'established', 'veteran']).
    """
    return {segment_type.value: list(values) for segment_type, values in SEGMENT_VALUES.items()}


def parse_segment_type(segment_type: Union[str, SegmentType]) -> SegmentType:
    """
    Convert an axis name to SegmentType.

    Matching is exact and case-sensitive.

    Raises:
        UnknownSegmentTypeError: If the name is not one of the seven axes.
    """
    try:
        return SegmentType(segment_type)
    except ValueError:
        raise UnknownSegmentTypeError(
            str(segment_type), [s.value for s in SegmentType]
        ) from None


def get_segment_values(segment_type: Union[str, SegmentType]) -> Tuple[str, ...]:
    return SEGMENT_VALUES[parse_segment_type(segment_type)]


def validate_segment(
    segment_type: Union[str, SegmentType],
    segment_value: str
) -> Tuple[SegmentType, str]:
    """
    Validate an (axis, value) pair.

    Args:
        segment_type: Axis name or SegmentType.
        segment_value: Value expected to belong to the axis's value set.

    Returns:
        The parsed SegmentType and the unchanged value.

    Raises:
        UnknownSegmentTypeError: If the axis is unknown.
        UnknownSegmentValueError: If the value is not in the axis's value set
            (exact string equality, no case folding).
    """
    parsed = parse_segment_type(segment_type)
    segment_value = getattr(segment_value, "value", segment_value)
    allowed = SEGMENT_VALUES[parsed]
    if segment_value not in allowed:
        raise UnknownSegmentValueError(parsed.value, segment_value, allowed)
    return parsed, segment_value

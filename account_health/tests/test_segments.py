"""
Pytest test module for the segment taxonomy and error types.

Covers:
- list_segments: seven axes in declaration order with their fixed values
- parse_segment_type / validate_segment: exact, case-sensitive matching
- Error messages and details carried to the API envelope
"""

import pytest

from account_health.core.exceptions import (
    InvalidIdentifierError,
    UnknownSegmentTypeError,
    UnknownSegmentValueError,
)
from account_health.models import SegmentType, SpendLevel
from account_health.services.segments import (
    SEGMENT_VALUES,
    get_segment_values,
    list_segments,
    parse_segment_type,
    validate_segment,
)


class TestListSegments:

    def test_seven_axes(self) -> None:
        assert list(list_segments()) == [
            "experienceLevel",
            "businessModel",
            "specialization",
            "platformEngagement",
            "spendLevel",
            "marketTypeLocation",
            "marketTypeCondition",
        ]

    def test_values_in_declaration_order(self) -> None:
        segments = list_segments()
        assert segments["experienceLevel"] == ["rookie", "established", "veteran"]
        assert segments["specialization"] == [
            "residential", "residentialInvestor", "luxury", "commercial",
        ]
        assert segments["spendLevel"] == ["lessThan1k", "lessThan10k", "moreThan10k"]
        assert segments["marketTypeCondition"] == ["warm", "hot", "cooling"]

    def test_listing_is_a_copy(self) -> None:
        list_segments()["experienceLevel"].append("legend")
        assert "legend" not in SEGMENT_VALUES[SegmentType.EXPERIENCE_LEVEL]

    def test_get_segment_values(self) -> None:
        assert get_segment_values("marketTypeLocation") == ("suburban", "urban", "rural")


class TestValidation:

    def test_parse_known_axis(self) -> None:
        assert parse_segment_type("platformEngagement") is SegmentType.PLATFORM_ENGAGEMENT
        assert parse_segment_type(SegmentType.SPEND_LEVEL) is SegmentType.SPEND_LEVEL

    def test_axis_is_case_sensitive(self) -> None:
        with pytest.raises(UnknownSegmentTypeError) as exc_info:
            parse_segment_type("SpendLevel")
        error = exc_info.value
        assert error.code == "INVALID_REQUEST"
        assert error.details["field"] == "segmentType"
        assert error.details["value"] == "SpendLevel"
        assert "spendLevel" in error.details["allowed"]

    def test_validate_returns_parsed_pair(self) -> None:
        assert validate_segment("businessModel", "brokerage") == (SegmentType.BUSINESS_MODEL, "brokerage")

    def test_validate_accepts_value_enum(self) -> None:
        assert validate_segment(SegmentType.SPEND_LEVEL, SpendLevel.LESS_THAN_1K) == (
            SegmentType.SPEND_LEVEL,
            "lessThan1k",
        )

    def test_value_from_another_axis(self) -> None:
        with pytest.raises(UnknownSegmentValueError) as exc_info:
            validate_segment("experienceLevel", "luxury")
        error = exc_info.value
        assert error.details["segmentType"] == "experienceLevel"
        assert error.details["allowed"] == ["rookie", "established", "veteran"]
        assert "'luxury'" in error.message
        assert "'experienceLevel'" in error.message
        assert str(error) == error.message

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            validate_segment("experienceLevel", "")
        assert issubclass(UnknownSegmentValueError, InvalidIdentifierError)

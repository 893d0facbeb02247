"""Tests for colleges.models and colleges.slug."""

import pytest
from pydantic import ValidationError

from colleges.models import CollegeCreate, CollegeUpdate, FeeStructure, PlacementStats
from colleges.slug import slugify


class TestFeeStructure:
    def test_total_is_sum_of_components(self) -> None:
        fee = FeeStructure(tuition=150000, hostel=60000, other=15000)
        assert fee.total == 225000

    def test_supplied_total_ignored(self) -> None:
        fee = FeeStructure.model_validate({"tuition": 1, "hostel": 2, "other": 3, "total": 100})
        assert fee.total == 6

    def test_negative_component_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FeeStructure(tuition=-1)


class TestPlacementStats:
    def test_highest_below_average_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PlacementStats(averagePackage=900000, highestPackage=500000)

    def test_percentage_bounded(self) -> None:
        with pytest.raises(ValidationError):
            PlacementStats(percentage=101)

    def test_year_wise_series(self) -> None:
        stats = PlacementStats.model_validate({
            "percentage": 92,
            "averagePackage": 1200000,
            "highestPackage": 4500000,
            "topRecruiters": ["Google", "Microsoft"],
            "yearWiseData": [{"year": "2023", "percentage": 90, "averagePackage": 1100000, "highestPackage": 4000000}],
        })
        assert stats.year_wise_data[0].year == "2023"
        assert stats.model_dump(by_alias=True)["yearWiseData"][0]["averagePackage"] == 1100000


class TestCollegeCreate:
    def test_name_required(self) -> None:
        with pytest.raises(ValidationError):
            CollegeCreate.model_validate({"city": "Pune"})

    @pytest.mark.parametrize("field,value", [("rating", 5.5), ("rating", -1), ("ranking", -2), ("type", "Online"), ("status", "archived")])
    def test_invalid_values(self, field, value) -> None:
        with pytest.raises(ValidationError):
            CollegeCreate.model_validate({"name": "X", field: value})

    def test_dump_uses_camel_case_and_plain_enums(self) -> None:
        doc = CollegeCreate(name="X", shortDescription="short").model_dump(by_alias=True)
        assert doc["shortDescription"] == "short"
        assert doc["feeStructure"] == []
        assert doc["type"] == "Private"
        assert type(doc["type"]) is str
        assert doc["status"] == "draft"

    def test_update_tracks_only_supplied_fields(self) -> None:
        update = CollegeUpdate.model_validate({"city": "Pune"})
        assert update.model_dump(by_alias=True, exclude_unset=True) == {"city": "Pune"}


class TestSlugify:
    @pytest.mark.parametrize("name,expected", [
        ("Indian Institute of Technology Bombay", "indian-institute-of-technology-bombay"),
        ("Birla Institute of Technology and Science, Pilani", "birla-institute-of-technology-and-science-pilani"),
        ("St. Xavier's College - Mumbai", "st-xaviers-college-mumbai"),
        ("  NIT   Trichy ", "nit-trichy"),
        ("!!!", ""),
    ])
    def test_slugify(self, name, expected) -> None:
        assert slugify(name) == expected

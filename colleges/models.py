from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CollegeType(str, Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"
    GOVERNMENT = "Government"
    DEEMED = "Deemed"


class CollegeStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class CamelModel(BaseModel):
    # Stored documents and the JSON API both use camelCase keys
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class Course(CamelModel):
    id: Optional[str] = None
    name: str = ""
    duration: str = ""
    fees: float = Field(default=0, ge=0)
    seats: int = Field(default=0, ge=0)
    description: str = ""
    eligibility: str = ""


class FeeStructure(CamelModel):
    course_id: Optional[str] = None
    course_name: str = ""
    tuition: float = Field(default=0, ge=0)
    hostel: float = Field(default=0, ge=0)
    other: float = Field(default=0, ge=0)
    total: float = 0

    @model_validator(mode="after")
    def compute_total(self):
        # total is derived, never taken from input
        self.total = self.tuition + self.hostel + self.other
        return self


class YearWisePlacement(CamelModel):
    year: str = ""
    percentage: float = Field(default=0, ge=0, le=100)
    average_package: float = Field(default=0, ge=0)
    highest_package: float = Field(default=0, ge=0)


class PlacementStats(CamelModel):
    percentage: float = Field(default=0, ge=0, le=100)
    average_package: float = Field(default=0, ge=0)
    highest_package: float = Field(default=0, ge=0)
    top_recruiters: List[str] = []
    year_wise_data: List[YearWisePlacement] = []

    @model_validator(mode="after")
    def check_packages(self):
        if self.highest_package < self.average_package:
            raise ValueError("highestPackage must be greater than or equal to averagePackage")
        return self


class EligibilityCriteria(CamelModel):
    course_id: Optional[str] = None
    course_name: str = ""
    entrance_exams: List[str] = []
    criteria: str = ""


class CollegeBase(CamelModel):
    slug: Optional[str] = None
    name: str
    description: str = ""
    short_description: str = ""
    image: str = ""
    logo: str = ""
    location: str = ""
    city: str = ""
    state: str = ""
    established: Optional[int] = None
    type: CollegeType = CollegeType.PRIVATE
    accreditation: str = ""
    rating: float = Field(default=0, ge=0, le=5)
    ranking: int = Field(default=0, ge=0)
    status: CollegeStatus = CollegeStatus.DRAFT
    facilities: List[str] = []
    courses: List[Course] = []
    fee_structure: List[FeeStructure] = []
    placement: PlacementStats = Field(default_factory=PlacementStats)
    eligibility: List[EligibilityCriteria] = []


class CollegeCreate(CollegeBase):
    """Body of ``POST /colleges``: a partial college, defaults fill the rest."""


class CollegeUpdate(CamelModel):
    """Body of ``PUT /colleges/{id}``; only supplied fields replace stored ones."""

    slug: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    image: Optional[str] = None
    logo: Optional[str] = None
    location: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    established: Optional[int] = None
    type: Optional[CollegeType] = None
    accreditation: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    ranking: Optional[int] = Field(default=None, ge=0)
    status: Optional[CollegeStatus] = None
    facilities: Optional[List[str]] = None
    courses: Optional[List[Course]] = None
    fee_structure: Optional[List[FeeStructure]] = None
    placement: Optional[PlacementStats] = None
    eligibility: Optional[List[EligibilityCriteria]] = None


class CollegeDocument(CollegeBase):
    """A fully validated college as stored, minus its ``_id``."""

    slug: str
    created_at: datetime
    updated_at: datetime


class DashboardStats(CamelModel):
    total_colleges: int
    published: int
    drafts: int
    total_courses: int

"""College payload builders shared by the test modules."""

from colleges.models import CollegeCreate


def make_college(name, fees=(100000,), **overrides):
    """A create payload with one course per entry in ``fees``."""
    payload = {
        "name": name,
        "city": "Mumbai",
        "state": "Maharashtra",
        "type": "Private",
        "rating": 4.0,
        "ranking": 10,
        "status": "published",
        "courses": [
            {"name": f"Course {i}", "duration": "4 years", "fees": fee, "seats": 60}
            for i, fee in enumerate(fees)
        ],
        "placement": {"percentage": 80, "averagePackage": 600000, "highestPackage": 2000000},
    }
    payload.update(overrides)
    return payload


def make_doc(name, fees=(100000,), **overrides):
    """A fully defaulted in-memory college document."""
    doc = CollegeCreate.model_validate(make_college(name, fees, **overrides)).model_dump(by_alias=True)
    doc["id"] = name
    return doc

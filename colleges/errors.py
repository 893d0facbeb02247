class CollegeError(Exception):
    """Base class for college domain errors."""


class CollegeNotFoundError(CollegeError):
    def __init__(self, ref: str):
        super().__init__(f"College not found: {ref}")
        self.ref = ref


class DuplicateSlugError(CollegeError):
    def __init__(self, slug: str):
        super().__init__(f"College with slug '{slug}' already exists")
        self.slug = slug


class InvalidCollegeError(CollegeError):
    pass

from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


class CourseStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class CourseLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CourseCategory(str, Enum):
    WEB_DEVELOPMENT = "web-development"
    DATA_SCIENCE = "data-science"
    MOBILE_DEVELOPMENT = "mobile-development"
    DESIGN = "design"
    MARKETING = "marketing"
    BUSINESS = "business"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()


class CourseSort(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    POPULAR = "popular"
    RATING = "rating"

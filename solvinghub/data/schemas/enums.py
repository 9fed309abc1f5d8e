from enum import Enum


class ProblemCategory(str, Enum):
    """Problem categories offered by the posting form."""
    EDUCATION = "Education"
    TECHNOLOGY = "Technology"
    HEALTH = "Health"
    ENVIRONMENT = "Environment"
    FOOD_AGRICULTURE = "Food & Agriculture"
    TRANSPORTATION = "Transportation"
    FINANCE = "Finance"
    SOCIAL = "Social"


class ProblemStatus(str, Enum):
    """Problem lifecycle statuses."""
    OPEN = "open"
    ACTIVE = "active"
    HAS_SOLUTIONS = "has_solutions"
    SOLVED = "solved"
    ARCHIVED = "archived"


class SortField(str, Enum):
    VOTES = "votes"
    DISCUSSIONS = "discussions"
    VIEWS = "view_count"
    CREATED_AT = "created_at"
    TITLE = "title"

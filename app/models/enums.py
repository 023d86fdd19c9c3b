from enum import Enum


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SearchSortMetric(str, Enum):
    """Metrics the catalog search accepts in `<metric>_<direction>` sort values."""
    PRICE = "price"
    SOLD_COUNT = "sold_count"
    RATING = "rating"


class ProductSortField(str, Enum):
    """Product columns the admin listing may be ordered by."""
    ID = "id"
    TITLE = "title"
    PRICE = "price"
    RATING = "rating"
    SOLD_COUNT = "sold_count"
    REVIEW_COUNT = "review_count"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

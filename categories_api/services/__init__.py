from .categories import CategoriesService
from .errors import (
    CategoryAuthorizationError,
    CategoryError,
    CategoryNotFoundError,
    CategoryValidationError,
    UnexpectedCategoryError,
)
from .validator import CategoryValidator, set_icon_id, validate_name

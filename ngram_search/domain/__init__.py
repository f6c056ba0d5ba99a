"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure. Used by application and infrastructure
layers.
"""

from ngram_search.domain.enums import DateBucket, NgramMode, SortDirection
from ngram_search.domain.exceptions import (
    ConfigurationException,
    InvalidInputException,
    RecordNotFoundException,
    SearchException,
    SqlNotConfiguredException,
)
from ngram_search.domain.value_objects import (
    NgramConfig,
    PaginationRequest,
    SortOrder,
)

__all__ = [
    # Enums
    "DateBucket",
    "NgramMode",
    "SortDirection",
    # Exceptions
    "ConfigurationException",
    "InvalidInputException",
    "RecordNotFoundException",
    "SearchException",
    "SqlNotConfiguredException",
    # Value objects
    "NgramConfig",
    "PaginationRequest",
    "SortOrder",
]

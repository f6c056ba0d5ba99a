"""Application services: n-grams, checksums, search data, predicates, sorting."""

from ngram_search.application.services.checksum_service import (
    ChecksumService,
    HashAlgorithm,
    SHA256Algorithm,
    SHA512Algorithm,
)
from ngram_search.application.services.dialect_fragments import (
    build_date_bucket_expression,
    build_date_range_condition,
    build_next_sequence_value_query,
)
from ngram_search.application.services.ngram_config_cache import (
    NgramConfigCache,
    ngram_config_cache,
)
from ngram_search.application.services.ngram_service import NgramService, create_ngrams
from ngram_search.application.services.search_data_assembler import SearchDataAssembler
from ngram_search.application.services.search_predicate_builder import (
    SearchPredicateBuilder,
    as_clause,
)
from ngram_search.application.services.sort_criteria_resolver import (
    ResolvedSort,
    SortCriteriaResolver,
    init_sort_criteria,
)

__all__ = [
    "ChecksumService",
    "HashAlgorithm",
    "SHA256Algorithm",
    "SHA512Algorithm",
    "build_date_bucket_expression",
    "build_date_range_condition",
    "build_next_sequence_value_query",
    "NgramConfigCache",
    "ngram_config_cache",
    "NgramService",
    "create_ngrams",
    "SearchDataAssembler",
    "SearchPredicateBuilder",
    "as_clause",
    "ResolvedSort",
    "SortCriteriaResolver",
    "init_sort_criteria",
]

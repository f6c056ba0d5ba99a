"""Core constants: persisted column names and reserved sort keys."""

# Columns every searchable table must provide
FULL_TEXT_SEARCH_DATA_COLUMN = "full_text_search_data"
FULL_TEXT_SEARCH_DATA_CHECKSUM_COLUMN = "full_text_search_data_checksum"

# Not a column: sorting by it means "order by search rank, descending"
SEARCH_RANK_PSEUDOFIELD = "_searchRank"

# Fallback sort when there is nothing to rank by (newest first)
DEFAULT_SORT_FIELD = "created_at"

DEFAULT_PAGE_SIZE = 20

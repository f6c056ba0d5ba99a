"""Install the full-text search store functions into the configured database.

Usage:
    python -m scripts.install_search_functions
Creates (or replaces) FULL_TEXT_SEARCH, FULL_TEXT_SEARCH_RANK and
JSON_CONTAINS for the dialect named by SQL_DIALECT, using DATABASE_URL.
"""

import asyncio
import sys

from ngram_search.core.config import get_settings
from ngram_search.domain.exceptions import SearchException, SqlNotConfiguredException
from ngram_search.infrastructure.persistence import database
from ngram_search.infrastructure.persistence.dialects import get_dialect
from ngram_search.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Run the dialect's function DDL in one transaction."""
    setup_logging()
    settings = get_settings()
    try:
        dialect = get_dialect(settings.sql_dialect)
    except SearchException as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)

    try:
        async for session in database.get_db_transactional():
            await database.install_search_functions(await session.connection(), dialect)
    except SqlNotConfiguredException as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)
    await database.engine.dispose()
    print(f"Installed search functions for {dialect.name}")


if __name__ == "__main__":
    asyncio.run(main())

"""
Free-text search over watchlist records.
"""


def _searchable_fields(record):
    return [record.name, record.director or "", record.actors or ""]


def matches_query(record, query):
    """
    Check whether a record matches a search box query.

    Args:
        record: MovieRecord
        query: Search text; matched case-insensitively against name,
            director and actors

    Returns:
        Bool: True if any field contains the query, or the query is blank
    """
    needle = (query or "").strip().lower()
    if not needle:
        return True
    return any(needle in value.lower() for value in _searchable_fields(record))


def search_records(records, query):
    """Filter records by query, keeping their order."""
    return [r for r in records if matches_query(r, query)]

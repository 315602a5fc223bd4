# src/filters/query_matcher.py

"""Free-text product name matching."""


class QueryMatcher:
    """Case-insensitive substring matching of product names."""

    @staticmethod
    def normalise(query: str | None) -> str:
        """Trim and lowercase *query*; ``None`` becomes ``""``."""
        if query is None:
            return ""
        return query.strip().lower()

    @staticmethod
    def matches(name: str, normalised_query: str) -> bool:
        """Return True when the name contains the query.

        *normalised_query* must already be passed through
        :meth:`normalise`.  An empty query matches every name.
        """
        if not normalised_query:
            return True
        return normalised_query in name.lower()

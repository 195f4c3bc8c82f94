"""Search index exceptions."""


class SearchIndexError(Exception):
    """Base exception for search index errors."""


class ConnectionError(SearchIndexError):
    """Raised when the Solr core cannot be reached."""


class QueryError(SearchIndexError):
    """Raised when a search or count query fails."""


class IndexingError(SearchIndexError):
    """Raised when adding, updating or deleting a document fails."""


class ConfigurationError(SearchIndexError):
    """Raised when query configuration is invalid (e.g. an unknown named query)."""

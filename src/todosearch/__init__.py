"""Todo Search — Todo list service with Apache Solr backed full-text search."""

__version__ = "0.1.0"

"""Solr query construction — escaping, field criteria, and query templates.

Three ways of producing a query string are supported, matching the three
search strategies of the index service:

  - :func:`contains` / :func:`any_of` build criteria from field names
    and values (``title:*foo* OR description:*foo*``)
  - :class:`NamedQueries` resolves a query template by name, from built-in
    defaults or a YAML file
  - :class:`QueryTemplate` fills ``?0``, ``?1``, ... placeholders of a fixed
    template with escaped arguments
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path

from todosearch.search.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MATCH_ALL = "*:*"

_SPECIAL_CHARS = re.compile(r'([+\-!(){}\[\]^"~*?:\\/]|&&|\|\||\s)')
_PLACEHOLDER = re.compile(r"\?(\d+)")


def escape(value: str) -> str:
    """Escape Solr query syntax characters (and whitespace) in ``value``."""
    return _SPECIAL_CHARS.sub(lambda m: "".join("\\" + ch for ch in m.group(0)), value)


def contains(field: str, value: str) -> str:
    """Wildcard criterion matching ``value`` anywhere inside ``field``."""
    return f"{field}:*{escape(value)}*"


def any_of(*clauses: str) -> str:
    """OR-combine clauses, dropping empty ones."""
    parts = [c for c in clauses if c]
    if not parts:
        return MATCH_ALL
    return " OR ".join(parts)


class QueryTemplate:
    """A Solr query with positional ``?N`` placeholders.

    Example:
        >>> QueryTemplate("title:*?0*").render("Foo")
        'title:*Foo*'
    """

    def __init__(self, template: str) -> None:
        self.template = template

    def render(self, *args: str) -> str:
        def _replace(match: re.Match[str]) -> str:
            index = int(match.group(1))
            if index >= len(args):
                raise ConfigurationError(
                    f"Query '{self.template}' references ?{index} but only {len(args)} argument(s) were given."
                )
            return escape(str(args[index]))

        return _PLACEHOLDER.sub(_replace, self.template)

    def __repr__(self) -> str:
        return f"QueryTemplate({self.template!r})"


FIND_BY_NAMED_QUERY = "TodoDocument.findByNamedQuery"

DEFAULT_NAMED_QUERIES: dict[str, str] = {
    FIND_BY_NAMED_QUERY: "title:*?0* OR description:*?0*",
}


class NamedQueries:
    """Registry of query templates looked up by name."""

    def __init__(self, queries: Mapping[str, str] | None = None) -> None:
        self._queries: dict[str, QueryTemplate] = {}
        for name, query in (queries if queries is not None else DEFAULT_NAMED_QUERIES).items():
            self.register(name, query)

    @classmethod
    def from_yaml(cls, path: str | Path) -> NamedQueries:
        """Load named queries from a YAML mapping of ``name: query``.

        Entries in the file override the built-in defaults.
        """
        import yaml  # type: ignore[import-untyped]

        queries_path = Path(path)
        if not queries_path.exists():
            raise ConfigurationError(f"Named query file not found: {queries_path}")

        with open(queries_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Named query file must contain a mapping: {queries_path}")

        registry = cls()
        for name, query in data.items():
            registry.register(str(name), str(query))
        logger.info("Loaded %d named queries from %s", len(data), queries_path)
        return registry

    def register(self, name: str, query: str) -> None:
        self._queries[name] = QueryTemplate(query)

    def get(self, name: str) -> QueryTemplate:
        try:
            return self._queries[name]
        except KeyError:
            raise ConfigurationError(f"No named query registered as '{name}'.") from None

    @property
    def names(self) -> list[str]:
        return list(self._queries.keys())

"""In-process evaluation of filters and projections.

Used by stores that cannot push queries down to a server. Supports what
routes produce: flat equality filters and ``{field: 1|0}`` projections.
"""

from typing import Any, Dict, Optional

from .store import ID_FIELD


class QueryEngine:
    """Equality filter and projection evaluation."""

    @staticmethod
    def match(document: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
        """Check if a document matches a query.

        Args:
            document: Document to check
            query: Field to value map, empty or None matches everything

        Returns:
            True if every queried field equals its value, False otherwise
        """
        if not query:
            return True
        return all(document.get(key) == value for key, value in query.items())

    @staticmethod
    def project(
        document: Dict[str, Any], projection: Optional[Dict[str, int]]
    ) -> Dict[str, Any]:
        """Apply a field visibility map to a document.

        When any field is included only included fields (plus ``_id``) are
        kept; excluded fields are dropped in either mode.

        Args:
            document: Source document, left unmodified
            projection: ``{field: 1|0}`` map, empty or None for all fields

        Returns:
            Projected copy of the document
        """
        if not projection:
            return dict(document)

        included = {field for field, flag in projection.items() if flag}
        excluded = {field for field, flag in projection.items() if not flag}

        if included:
            keep = included | {ID_FIELD}
            result = {k: v for k, v in document.items() if k in keep}
        else:
            result = dict(document)

        for field in excluded:
            result.pop(field, None)
        return result

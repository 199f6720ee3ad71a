"""
Id-keyed lookups over one schema snapshot.

Elements only carry ids of the entities they reference; the index turns
those ids back into content types, snippets and taxonomy groups.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, TypeVar

from .generator import GeneratorError
from .schema import (
    ContentType,
    ContentTypeSnippet,
    SchemaError,
    SchemaSnapshot,
    TaxonomyGroup,
)
from ...logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class UnresolvedReferenceError(GeneratorError):
    """An id does not match any entity of the fetched snapshot."""

    def __init__(self, kind: str, entity_id: str, referenced_by: Optional[str] = None):
        self.kind = kind
        self.entity_id = entity_id
        self.referenced_by = referenced_by
        message = f"Could not find {kind} with id '{entity_id}'"
        if referenced_by:
            message += f" (referenced by {referenced_by})"
        super().__init__(message)


def _build_map(entities: Iterable[T], kind: str) -> Mapping[str, T]:
    mapping: Dict[str, T] = {}
    for entity in entities:
        if entity.id in mapping:
            raise SchemaError(f"Duplicate {kind} id '{entity.id}'")
        mapping[entity.id] = entity
    return MappingProxyType(mapping)


class SchemaIndex:
    """Read-only id -> entity lookups, built once per run."""

    def __init__(
        self,
        types: Iterable[ContentType] = (),
        snippets: Iterable[ContentTypeSnippet] = (),
        taxonomies: Iterable[TaxonomyGroup] = (),
    ):
        self._types: Tuple[ContentType, ...] = tuple(types)
        self._snippets: Tuple[ContentTypeSnippet, ...] = tuple(snippets)
        self._taxonomies: Tuple[TaxonomyGroup, ...] = tuple(taxonomies)

        self._type_map = _build_map(self._types, "content type")
        self._snippet_map = _build_map(self._snippets, "content type snippet")
        self._taxonomy_map = _build_map(self._taxonomies, "taxonomy group")

        logger.debug(
            "Schema index built: %d types, %d snippets, %d taxonomies",
            len(self._types),
            len(self._snippets),
            len(self._taxonomies),
        )

    @classmethod
    def from_snapshot(cls, snapshot: SchemaSnapshot) -> "SchemaIndex":
        return cls(snapshot.types, snapshot.snippets, snapshot.taxonomies)

    @property
    def types(self) -> Tuple[ContentType, ...]:
        return self._types

    @property
    def snippets(self) -> Tuple[ContentTypeSnippet, ...]:
        return self._snippets

    @property
    def taxonomies(self) -> Tuple[TaxonomyGroup, ...]:
        return self._taxonomies

    def content_type(self, type_id: str, referenced_by: Optional[str] = None) -> ContentType:
        """Look up a content type; raises UnresolvedReferenceError if absent."""
        try:
            return self._type_map[type_id]
        except KeyError:
            raise UnresolvedReferenceError("content type", type_id, referenced_by) from None

    def snippet(self, snippet_id: str, referenced_by: Optional[str] = None) -> ContentTypeSnippet:
        """Look up a content type snippet; raises UnresolvedReferenceError if absent."""
        try:
            return self._snippet_map[snippet_id]
        except KeyError:
            raise UnresolvedReferenceError(
                "content type snippet", snippet_id, referenced_by
            ) from None

    def taxonomy(self, taxonomy_id: str, referenced_by: Optional[str] = None) -> TaxonomyGroup:
        """Look up a taxonomy group; raises UnresolvedReferenceError if absent."""
        try:
            return self._taxonomy_map[taxonomy_id]
        except KeyError:
            raise UnresolvedReferenceError(
                "taxonomy group", taxonomy_id, referenced_by
            ) from None

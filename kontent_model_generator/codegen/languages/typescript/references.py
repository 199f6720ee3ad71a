"""
Cross-file references of generated models.

Collects the content types, snippets and taxonomy groups a model refers
to and turns them into sorted, deduplicated type-only imports.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ...core.index import SchemaIndex
from ...core.naming import NameResolver
from ...core.schema import (
    ContentType,
    ContentTypeSnippet,
    ElementGroup,
    LinkedItemsElement,
    SnippetElement,
    TaxonomyElement,
)
from ....logging_config import get_logger
from .elements import ElementTypeMapper, ExtendedElement, InvalidElementError

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReferenceDescriptor:
    """A generated type imported from another generated file."""

    type_name: str
    file_path: str

    def statement(self, quote: str = "'") -> str:
        return f"import {{ type {self.type_name} }} from {quote}{self.file_path}{quote};"


@dataclass(frozen=True)
class References:
    """Everything a model needs from other generated files."""

    imports: Tuple[ReferenceDescriptor, ...]
    snippet_extensions: Tuple[str, ...]
    elements: Tuple[ExtendedElement, ...]


class ReferenceResolver:
    """Computes imports and snippet extensions for one model at a time."""

    def __init__(self, index: SchemaIndex, names: NameResolver,
                 mapper: ElementTypeMapper = None, quote: str = "'"):
        self.index = index
        self.names = names
        self.mapper = mapper or ElementTypeMapper(index, names)
        self.quote = quote

    def compute_references(self, owner: ElementGroup) -> References:
        """
        Find all entities referenced by the elements of owner.

        Elements without a resolved field name do not contribute. The owner
        never imports itself.

        Raises:
            UnresolvedReferenceError: If a referenced id is not in the index
        """
        elements = self.mapper.map_elements(owner)

        # Insertion-ordered id sets
        type_ids: Dict[str, None] = {}
        snippet_ids: Dict[str, None] = {}
        taxonomy_ids: Dict[str, None] = {}

        for extended in elements:
            if extended.mapped_name is None:
                continue
            element = extended.element

            if isinstance(element, LinkedItemsElement):
                for type_id in element.allowed_content_types:
                    type_ids.setdefault(type_id)
            elif isinstance(element, TaxonomyElement):
                if element.taxonomy_group_id:
                    taxonomy_ids.setdefault(element.taxonomy_group_id)
            elif isinstance(element, SnippetElement):
                if not element.snippet_id:
                    raise InvalidElementError(
                        f"Snippet element '{element.codename}' does not reference a snippet"
                    )
                snippet_ids.setdefault(element.snippet_id)

        if isinstance(owner, ContentType):
            type_ids.pop(owner.id, None)
        elif isinstance(owner, ContentTypeSnippet):
            snippet_ids.pop(owner.id, None)

        referenced_by = f"'{owner.codename or owner.id}'"
        types = [self.index.content_type(i, referenced_by) for i in type_ids]
        snippets = [self.index.snippet(i, referenced_by) for i in snippet_ids]
        taxonomies = [self.index.taxonomy(i, referenced_by) for i in taxonomy_ids]

        imports = self._descriptors(owner, types + snippets + taxonomies)
        extensions = tuple(sorted({self.names.type_name(s) for s in snippets}))

        logger.debug(
            "'%s' references %d types, %d snippets, %d taxonomies",
            owner.codename,
            len(types),
            len(snippets),
            len(taxonomies),
        )

        return References(
            imports=imports,
            snippet_extensions=extensions,
            elements=tuple(elements),
        )

    def _descriptors(self, owner: ElementGroup, entities: List) -> Tuple[ReferenceDescriptor, ...]:
        descriptors = {}
        for entity in entities:
            descriptor = ReferenceDescriptor(
                type_name=self.names.type_name(entity),
                file_path=self.names.import_path(owner, entity),
            )
            descriptors[descriptor.statement(self.quote)] = descriptor

        return tuple(descriptors[statement] for statement in sorted(descriptors))

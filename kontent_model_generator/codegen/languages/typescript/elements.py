"""
Element type mapping for Delivery SDK models.

Turns schema elements into field descriptions: the generated field name
and the `Elements.*` type expression from @kontent-ai/delivery-sdk.
"""

from dataclasses import dataclass
from typing import List, Optional

from ...core.generator import GeneratorError
from ...core.index import SchemaIndex
from ...core.naming import NameResolver
from ...core.schema import (
    ContentTypeSnippet,
    Element,
    ElementGroup,
    ElementKind,
    LinkedItemsElement,
    TaxonomyElement,
)


class InvalidElementError(GeneratorError):
    """An element lacks data required to generate its field."""

    pass


# Element kinds with a fixed type expression
SCALAR_TYPES = {
    ElementKind.TEXT: "TextElement",
    ElementKind.NUMBER: "NumberElement",
    ElementKind.DATE_TIME: "DateTimeElement",
    ElementKind.ASSET: "AssetsElement",
    ElementKind.RICH_TEXT: "RichTextElement",
    ElementKind.MULTIPLE_CHOICE: "MultipleChoiceElement",
    ElementKind.URL_SLUG: "UrlSlugElement",
    ElementKind.CUSTOM: "CustomElement",
}

ELEMENTS_NAMESPACE = "Elements"
ANY_ITEM_TYPE = "IContentItem"


@dataclass(frozen=True)
class ExtendedElement:
    """An element together with its resolved field name and type."""

    element: Element
    mapped_type: Optional[str]
    mapped_name: Optional[str]
    snippet: Optional[ContentTypeSnippet] = None

    @property
    def kind(self) -> ElementKind:
        return self.element.kind

    @property
    def is_field(self) -> bool:
        """Whether the element is emitted as a field."""
        return self.mapped_type is not None and self.mapped_name is not None


def _element_label(element: Element, owner: ElementGroup) -> str:
    return f"element '{element.codename or element.id}' of '{owner.codename or owner.id}'"


class ElementTypeMapper:
    """Maps elements of content types and snippets to Delivery SDK types."""

    def __init__(self, index: SchemaIndex, names: NameResolver):
        self.index = index
        self.names = names

    def map_element(self, element: Element, owner: ElementGroup) -> ExtendedElement:
        """
        Resolve field name and type expression of one element.

        Args:
            element: Element to map
            owner: Content type or snippet declaring the element

        Returns:
            ExtendedElement; mapped_type is None for kinds without a field
        """
        if not element.codename:
            raise InvalidElementError(f"Invalid codename for element '{element.id}'")

        snippet = owner if isinstance(owner, ContentTypeSnippet) else None
        return ExtendedElement(
            element=element,
            mapped_type=self._map_type(element, owner),
            mapped_name=self.names.field_name(element, owner),
            snippet=snippet,
        )

    def map_elements(self, owner: ElementGroup) -> List[ExtendedElement]:
        """Map all elements of owner, ordered by field name."""
        extended = [self.map_element(element, owner) for element in owner.elements]
        return sorted(extended, key=_field_order)

    def _map_type(self, element: Element, owner: ElementGroup) -> Optional[str]:
        kind = element.kind

        if kind in SCALAR_TYPES:
            return f"{ELEMENTS_NAMESPACE}.{SCALAR_TYPES[kind]}"

        if isinstance(element, LinkedItemsElement):
            return f"{ELEMENTS_NAMESPACE}.LinkedItemsElement<{self._allowed_types(element, owner)}>"

        if isinstance(element, TaxonomyElement):
            taxonomy_name = self._taxonomy_name(element, owner)
            if not taxonomy_name:
                return f"{ELEMENTS_NAMESPACE}.TaxonomyElement"
            return f"{ELEMENTS_NAMESPACE}.TaxonomyElement<{taxonomy_name}>"

        # Snippet, guidelines and kinds added to the API after this version
        return None

    def _allowed_types(self, element: LinkedItemsElement, owner: ElementGroup) -> str:
        if not element.allowed_content_types:
            return ANY_ITEM_TYPE

        referenced_by = _element_label(element, owner)
        names = {
            self.names.type_name(self.index.content_type(type_id, referenced_by))
            for type_id in element.allowed_content_types
        }
        return " | ".join(sorted(names))

    def _taxonomy_name(self, element: TaxonomyElement, owner: ElementGroup) -> str:
        if not element.taxonomy_group_id:
            raise InvalidElementError(
                f"Taxonomy {_element_label(element, owner)} has no taxonomy group"
            )
        taxonomy = self.index.taxonomy(
            element.taxonomy_group_id, _element_label(element, owner)
        )
        return self.names.type_name(taxonomy)


def _field_order(extended: ExtendedElement):
    name = extended.mapped_name or ""
    return (
        name.casefold(),
        name,
        extended.element.codename or "",
        extended.element.id,
    )

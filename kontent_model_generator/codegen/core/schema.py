"""
Core schema representation for code generation.

Converts Management API payloads into immutable content type, snippet
and taxonomy objects that generators can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Any
from enum import Enum

from .generator import GeneratorError


class SchemaError(GeneratorError):
    """Raised when a schema payload is malformed."""

    pass


class ElementKind(Enum):
    """Element types known to the Management API."""

    TEXT = "text"
    NUMBER = "number"
    DATE_TIME = "date_time"
    ASSET = "asset"
    RICH_TEXT = "rich_text"
    MULTIPLE_CHOICE = "multiple_choice"
    URL_SLUG = "url_slug"
    CUSTOM = "custom"
    TAXONOMY = "taxonomy"
    MODULAR_CONTENT = "modular_content"
    SUBPAGES = "subpages"
    SNIPPET = "snippet"
    GUIDELINES = "guidelines"
    UNKNOWN = "unknown"

    @classmethod
    def from_type(cls, type_name: str) -> "ElementKind":
        """Map a raw element type to a kind, UNKNOWN for anything new."""
        try:
            return cls(type_name)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Element:
    """A single element of a content type or snippet."""

    id: str
    codename: Optional[str]
    kind: ElementKind
    name: Optional[str] = None
    required: bool = False
    guidelines: Optional[str] = None
    raw_type: str = ""  # Type string as sent by the API

    def __post_init__(self):
        if not self.raw_type:
            object.__setattr__(self, "raw_type", self.kind.value)


@dataclass(frozen=True)
class LinkedItemsElement(Element):
    """Linked items element, optionally limited to an allow-list of types."""

    allowed_content_types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SubpagesElement(LinkedItemsElement):
    """Subpages element; same payload as linked items."""

    pass


@dataclass(frozen=True)
class TaxonomyElement(Element):
    """Element constrained to one taxonomy group."""

    taxonomy_group_id: Optional[str] = None


@dataclass(frozen=True)
class SnippetElement(Element):
    """Placeholder that pulls a content type snippet into a type."""

    snippet_id: Optional[str] = None


@dataclass(frozen=True)
class GuidelinesElement(Element):
    """Documentation-only element."""

    pass


@dataclass(frozen=True)
class ElementGroup:
    """Common shape of content types and snippets."""

    id: str
    codename: Optional[str]
    name: str
    elements: Tuple[Element, ...] = ()

    def get_element(self, element_id: str) -> Optional[Element]:
        """Get element by id."""
        for element in self.elements:
            if element.id == element_id:
                return element
        return None


@dataclass(frozen=True)
class ContentType(ElementGroup):
    """A content type definition."""

    pass


@dataclass(frozen=True)
class ContentTypeSnippet(ElementGroup):
    """A reusable group of elements that content types extend."""

    pass


@dataclass(frozen=True)
class TaxonomyTerm:
    """One term of a taxonomy group, possibly with child terms."""

    id: str
    codename: Optional[str]
    name: str
    terms: Tuple["TaxonomyTerm", ...] = ()


@dataclass(frozen=True)
class TaxonomyGroup:
    """A named controlled vocabulary."""

    id: str
    codename: Optional[str]
    name: str
    terms: Tuple[TaxonomyTerm, ...] = ()

    def flatten_terms(self) -> List[TaxonomyTerm]:
        """Return all terms depth-first."""
        flattened = []

        def collect(terms):
            for term in terms:
                flattened.append(term)
                collect(term.terms)

        collect(self.terms)
        return flattened


@dataclass(frozen=True)
class SchemaSnapshot:
    """Everything fetched for one generation run."""

    types: Tuple[ContentType, ...] = ()
    snippets: Tuple[ContentTypeSnippet, ...] = ()
    taxonomies: Tuple[TaxonomyGroup, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)


def _require_id(data: Dict[str, Any], what: str) -> str:
    if not isinstance(data, dict):
        raise SchemaError(f"Expected an object for {what}, got {type(data).__name__}")
    entity_id = data.get("id")
    if not entity_id:
        label = data.get("codename") or data.get("name") or "?"
        raise SchemaError(f"Missing id for {what} '{label}'")
    return str(entity_id)


def _reference_id(reference: Any) -> Optional[str]:
    """Extract the id from a `{"id": ...}` reference object."""
    if isinstance(reference, dict):
        value = reference.get("id")
        return str(value) if value else None
    if isinstance(reference, str):
        return reference or None
    return None


def parse_element(data: Dict[str, Any]) -> Element:
    """Convert one Management API element payload to an Element."""
    element_id = _require_id(data, "element")
    raw_type = data.get("type") or ""
    kind = ElementKind.from_type(raw_type)

    common = {
        "id": element_id,
        "codename": data.get("codename"),
        "kind": kind,
        "name": data.get("name"),
        "required": bool(data.get("is_required", data.get("required", False))),
        "guidelines": data.get("guidelines"),
        "raw_type": raw_type,
    }

    if kind in (ElementKind.MODULAR_CONTENT, ElementKind.SUBPAGES):
        allowed = tuple(
            ref_id
            for ref_id in (
                _reference_id(ref) for ref in data.get("allowed_content_types") or []
            )
            if ref_id
        )
        element_class = (
            SubpagesElement if kind == ElementKind.SUBPAGES else LinkedItemsElement
        )
        return element_class(allowed_content_types=allowed, **common)

    if kind == ElementKind.TAXONOMY:
        return TaxonomyElement(
            taxonomy_group_id=_reference_id(data.get("taxonomy_group")), **common
        )

    if kind == ElementKind.SNIPPET:
        return SnippetElement(snippet_id=_reference_id(data.get("snippet")), **common)

    if kind == ElementKind.GUIDELINES:
        return GuidelinesElement(**common)

    return Element(**common)


def _parse_group(data: Dict[str, Any], group_class, what: str):
    return group_class(
        id=_require_id(data, what),
        codename=data.get("codename"),
        name=data.get("name") or "",
        elements=tuple(parse_element(e) for e in data.get("elements") or []),
    )


def parse_content_type(data: Dict[str, Any]) -> ContentType:
    """Convert a content type payload."""
    return _parse_group(data, ContentType, "content type")


def parse_snippet(data: Dict[str, Any]) -> ContentTypeSnippet:
    """Convert a content type snippet payload."""
    return _parse_group(data, ContentTypeSnippet, "content type snippet")


def _parse_term(data: Dict[str, Any]) -> TaxonomyTerm:
    return TaxonomyTerm(
        id=_require_id(data, "taxonomy term"),
        codename=data.get("codename"),
        name=data.get("name") or "",
        terms=tuple(_parse_term(t) for t in data.get("terms") or []),
    )


def parse_taxonomy(data: Dict[str, Any]) -> TaxonomyGroup:
    """Convert a taxonomy group payload."""
    return TaxonomyGroup(
        id=_require_id(data, "taxonomy group"),
        codename=data.get("codename"),
        name=data.get("name") or "",
        terms=tuple(_parse_term(t) for t in data.get("terms") or []),
    )


def parse_snapshot(data: Dict[str, Any]) -> SchemaSnapshot:
    """
    Convert raw Management API lists into a SchemaSnapshot.

    Args:
        data: Dict with optional "types", "snippets" and "taxonomies" lists

    Returns:
        SchemaSnapshot with parsed entities
    """
    if not isinstance(data, dict):
        raise SchemaError("Schema snapshot must be a JSON object")

    return SchemaSnapshot(
        types=tuple(parse_content_type(t) for t in data.get("types") or []),
        snippets=tuple(parse_snippet(s) for s in data.get("snippets") or []),
        taxonomies=tuple(parse_taxonomy(t) for t in data.get("taxonomies") or []),
        metadata=dict(data.get("metadata") or {}),
    )

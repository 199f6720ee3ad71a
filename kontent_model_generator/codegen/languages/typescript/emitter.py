"""
Model emitter for Delivery SDK TypeScript models.

Renders one file per content type, snippet and taxonomy group from the
resolved elements and references.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from .... import __version__
from ...core.formatting import CodeFormatter
from ...core.generator import EntityProcessingError
from ...core.index import SchemaIndex
from ...core.naming import NameResolver
from ...core.schema import (
    ContentType,
    ContentTypeSnippet,
    ElementGroup,
    TaxonomyElement,
    TaxonomyGroup,
)
from ...core.templates import TemplateEngine
from ....logging_config import get_logger
from .elements import ExtendedElement
from .references import ReferenceResolver

logger = get_logger(__name__)

DELIVERY_SDK_PACKAGE = "@kontent-ai/delivery-sdk"
GENERATOR_NAME = "kontent-model-generator"

MODEL_TEMPLATE = "model.ts.j2"
TAXONOMY_TEMPLATE = "taxonomy.ts.j2"


@dataclass(frozen=True)
class EmittedFile:
    """Generated code and its path relative to the output directory."""

    code: str
    file_path: str


def format_timestamp(moment: datetime) -> str:
    """Format like `Wed, 18 May 2022 09:48:04 GMT`."""
    return moment.astimezone(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S GMT")


def _entity_kind_label(entity) -> str:
    if isinstance(entity, ContentType):
        return "content type"
    if isinstance(entity, ContentTypeSnippet):
        return "content type snippet"
    return "taxonomy group"


class ModelEmitter:
    """Builds the code of generated model files."""

    def __init__(
        self,
        index: SchemaIndex,
        names: NameResolver,
        template_engine: TemplateEngine,
        formatter: Optional[CodeFormatter] = None,
        add_timestamp: bool = False,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.index = index
        self.names = names
        self.template_engine = template_engine
        self.formatter = formatter or CodeFormatter()
        self.add_timestamp = add_timestamp
        self.now = now or (lambda: datetime.now(timezone.utc))
        self.references = ReferenceResolver(index, names, quote=self.formatter.options.quote)

    def generation_note(self) -> str:
        """Note placed at the top of every generated model."""
        note = f"Generated by '{GENERATOR_NAME}@{__version__}'"
        if self.add_timestamp:
            note += f" at '{format_timestamp(self.now())}'"
        return note

    def emit_entity(self, owner: ElementGroup) -> EmittedFile:
        """
        Generate the model of a content type or snippet.

        Raises:
            EntityProcessingError: Wrapping whatever went wrong for this entity
        """
        try:
            references = self.references.compute_references(owner)
            fields = [e for e in references.elements if e.is_field]

            sdk_imports = ["type IContentItem"]
            if fields:
                sdk_imports.append("type Elements")

            code = self.template_engine.render_template(
                MODEL_TEMPLATE,
                {
                    "sdk_imports": sdk_imports,
                    "sdk_package": DELIVERY_SDK_PACKAGE,
                    "imports": [r.statement(self.formatter.options.quote) for r in references.imports],
                    "note": self.generation_note(),
                    "entity": owner,
                    "type_name": self.names.type_name(owner),
                    "fields": [self._field_context(e) for e in fields],
                    "extensions": list(references.snippet_extensions),
                    "quote": self.formatter.options.quote,
                },
            )
            return EmittedFile(self.formatter.format_code(code), self.names.module_path(owner))
        except Exception as e:
            raise self._processing_error(owner, e) from e

    def emit_taxonomy(self, taxonomy: TaxonomyGroup) -> EmittedFile:
        """Generate a union type of the term codenames of a taxonomy group."""
        try:
            terms = sorted({t.codename for t in taxonomy.flatten_terms() if t.codename})
            code = self.template_engine.render_template(
                TAXONOMY_TEMPLATE,
                {
                    "note": self.generation_note(),
                    "entity": taxonomy,
                    "type_name": self.names.type_name(taxonomy),
                    "terms": terms,
                    "quote": self.formatter.options.quote,
                },
            )
            return EmittedFile(self.formatter.format_code(code), self.names.module_path(taxonomy))
        except Exception as e:
            raise self._processing_error(taxonomy, e) from e

    def _processing_error(self, entity, error: Exception) -> EntityProcessingError:
        kind = _entity_kind_label(entity)
        logger.error(
            "Failed to process %s '%s' (%s)", kind, entity.codename, entity.name, exc_info=True
        )
        return EntityProcessingError(kind, entity.codename, entity.name, error)

    def _field_context(self, extended: ExtendedElement) -> Dict[str, object]:
        return {
            "name": extended.mapped_name,
            "type": extended.mapped_type,
            "comment": self._field_comment(extended),
        }

    def _field_comment(self, extended: ExtendedElement) -> List[str]:
        element = extended.element
        lines = []

        title = self._element_title(extended)
        if title:
            lines.append(f"{title} ({element.raw_type})")

        lines.append(f"Required: {'true' if element.required else 'false'}")
        lines.append(f"Id: {element.id}")
        lines.append(f"Codename: {element.codename}")

        if extended.snippet is not None:
            lines.append(f"From snippet: {extended.snippet.name}")
            lines.append(f"Snippet codename: {extended.snippet.codename}")

        if element.guidelines:
            lines.append("")
            lines.append(element.guidelines)

        return lines

    def _element_title(self, extended: ExtendedElement) -> Optional[str]:
        element = extended.element
        if element.name:
            return element.name
        # Taxonomy elements may leave the name to the taxonomy group
        if isinstance(element, TaxonomyElement) and element.taxonomy_group_id:
            return self.index.taxonomy(element.taxonomy_group_id).name or None
        return None

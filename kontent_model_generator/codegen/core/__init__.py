"""
Core code generation components.

Provides the schema model, lookups, naming and base classes used by all
model generators.
"""

from .generator import (
    CodeGenerator,
    EntityProcessingError,
    GeneratorError,
    GenerationResult,
)
from .schema import (
    ContentType,
    ContentTypeSnippet,
    Element,
    ElementKind,
    GuidelinesElement,
    LinkedItemsElement,
    SchemaError,
    SchemaSnapshot,
    SnippetElement,
    SubpagesElement,
    TaxonomyElement,
    TaxonomyGroup,
    TaxonomyTerm,
    parse_snapshot,
)
from .index import SchemaIndex, UnresolvedReferenceError
from .naming import (
    ModuleStyle,
    NameResolver,
    NameSanitizer,
    NameStrategies,
    NamingCase,
    convert_case,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .formatting import CodeFormatter, FormatOptions
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "EntityProcessingError",
    "GenerationResult",
    # Schema model
    "ContentType",
    "ContentTypeSnippet",
    "Element",
    "ElementKind",
    "GuidelinesElement",
    "LinkedItemsElement",
    "SchemaError",
    "SchemaSnapshot",
    "SnippetElement",
    "SubpagesElement",
    "TaxonomyElement",
    "TaxonomyGroup",
    "TaxonomyTerm",
    "parse_snapshot",
    # Lookups
    "SchemaIndex",
    "UnresolvedReferenceError",
    # Naming
    "ModuleStyle",
    "NameResolver",
    "NameSanitizer",
    "NameStrategies",
    "NamingCase",
    "convert_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Formatting and templates
    "CodeFormatter",
    "FormatOptions",
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]

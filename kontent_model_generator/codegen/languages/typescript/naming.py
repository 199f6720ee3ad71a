"""
TypeScript-specific naming utilities.

Handles TypeScript reserved words, identifiers the generated files import
from the SDK, and the folder layout of generated models.
"""

from ...core.config import ConfigError, GeneratorConfig
from ...core.index import SchemaIndex
from ...core.naming import ModuleStyle, NameResolver, NameStrategies
from ...core.schema import ContentType, ContentTypeSnippet, TaxonomyGroup


# Identifiers imported into every model file
SDK_IDENTIFIERS = {"IContentItem", "Elements"}

TYPESCRIPT_RESERVED_WORDS = {
    "any",
    "as",
    "bigint",
    "boolean",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "declare",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "implements",
    "import",
    "in",
    "instanceof",
    "interface",
    "let",
    "never",
    "new",
    "null",
    "number",
    "object",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "static",
    "string",
    "super",
    "switch",
    "symbol",
    "this",
    "throw",
    "true",
    "try",
    "type",
    "typeof",
    "undefined",
    "unknown",
    "var",
    "void",
    "while",
    "with",
    "yield",
}

# Global types a generated type name must not shadow
TYPESCRIPT_GLOBAL_TYPES = {
    "Array",
    "Boolean",
    "Date",
    "Error",
    "Function",
    "Map",
    "Number",
    "Object",
    "Partial",
    "Promise",
    "Record",
    "Set",
    "String",
    "Symbol",
}

RESERVED_TYPE_NAMES = TYPESCRIPT_RESERVED_WORDS | TYPESCRIPT_GLOBAL_TYPES | SDK_IDENTIFIERS


def create_name_resolver(index: SchemaIndex, config: GeneratorConfig) -> NameResolver:
    """Create a name resolver for TypeScript models laid out as configured."""
    try:
        module_style = ModuleStyle(config.module_style)
    except ValueError:
        raise ConfigError(
            f"Unsupported module style '{config.module_style}'. "
            f"Available options are: {', '.join(s.value for s in ModuleStyle)}"
        ) from None

    return NameResolver(
        index,
        strategies=NameStrategies.from_config(config),
        module_style=module_style,
        folders={
            ContentType: config.type_folder_name,
            ContentTypeSnippet: config.snippet_folder_name,
            TaxonomyGroup: config.taxonomy_folder_name,
        },
        reserved_type_names=RESERVED_TYPE_NAMES,
        # Barrel files are named index.ts
        reserved_file_names={"index"},
        file_extension=".ts",
        import_extension=".js",
    )

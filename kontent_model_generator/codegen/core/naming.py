"""
Naming utilities for safe code generation.

Handles case conversions, reserved word and duplicate conflicts, and
resolves type, field and file names for schema entities using either
built-in case strategies or caller-supplied functions.
"""

import posixpath
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Set, Union
from enum import Enum

from .config import ConfigError, GeneratorConfig
from .index import SchemaIndex
from .schema import (
    ContentType,
    ContentTypeSnippet,
    Element,
    ElementGroup,
    TaxonomyGroup,
)
from ...logging_config import get_logger

logger = get_logger(__name__)


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    KEBAB_CASE = "kebab"      # user-name


class ModuleStyle(Enum):
    """How relative import paths are written."""
    BARE = "bare"             # './movie'
    EXTENSION = "extension"   # './movie.js'


NameFunction = Callable[[Any], Optional[str]]
NameStrategy = Union[NamingCase, str, NameFunction]


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    # Replace hyphens, spaces and other separators with underscores
    name = re.sub(r'[^a-zA-Z0-9_]', '_', name)

    # Insert underscore before uppercase letters
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)

    # Convert to lowercase and clean up multiple underscores
    name = name.lower()
    name = re.sub(r'_+', '_', name)

    return name.strip('_')


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    parts = to_snake_case(name).split('_')

    # First part lowercase, rest title case
    return parts[0] + ''.join(part.capitalize() for part in parts[1:])


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    return ''.join(part.capitalize() for part in to_snake_case(name).split('_') if part)


def to_kebab_case(name: str) -> str:
    """Convert to kebab-case."""
    return to_snake_case(name).replace('_', '-')


_CONVERTERS = {
    NamingCase.SNAKE_CASE: to_snake_case,
    NamingCase.CAMEL_CASE: to_camel_case,
    NamingCase.PASCAL_CASE: to_pascal_case,
    NamingCase.KEBAB_CASE: to_kebab_case,
}


#: Separator placed before the numeric suffix of a duplicate name
_CONFLICT_SEPARATORS = {
    NamingCase.SNAKE_CASE: "_",
    NamingCase.CAMEL_CASE: "",
    NamingCase.PASCAL_CASE: "",
    NamingCase.KEBAB_CASE: "-",
}


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    return _CONVERTERS[target_case](name)


class NameSanitizer:
    """Handles case conversion plus reserved word and duplicate conflicts."""

    def __init__(self, reserved_words: Set[str] = None, identifiers: bool = True,
                 case_insensitive: bool = False):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Names that must never be produced as-is
            identifiers: Whether results must be valid identifiers (no leading digit)
            case_insensitive: Treat names differing only in case as duplicates
        """
        self.identifiers = identifiers
        self.case_insensitive = case_insensitive
        self.reserved_words = {self._key(w) for w in reserved_words or ()}
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, target_case: NamingCase) -> str:
        """
        Sanitize a name for safe use in generated code.

        Args:
            name: Original name (usually a codename)
            target_case: Desired case style

        Returns:
            Name unique among all names produced by this sanitizer
        """
        converted = convert_case(name, target_case)

        if not converted:
            converted = "item"

        # Ensure doesn't start with number
        if self.identifiers and converted[0].isdigit():
            converted = f"_{converted}"

        final_name = self._resolve_conflicts(
            converted, _CONFLICT_SEPARATORS[target_case]
        )
        self.add_used_name(final_name)
        return final_name

    def _key(self, name: str) -> str:
        return name.lower() if self.case_insensitive else name

    def _resolve_conflicts(self, name: str, separator: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        candidate = name
        counter = 1

        while self._key(candidate) in self.reserved_words or self._key(candidate) in self._used_names:
            counter += 1
            candidate = f"{name}{separator}{counter}"

        return candidate

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(self._key(name))


def strategy_label(strategy: NameStrategy) -> str:
    """Human readable name of a strategy, for reporting."""
    if callable(strategy) and not isinstance(strategy, NamingCase):
        return "custom"
    if isinstance(strategy, NamingCase):
        return strategy.value
    return str(strategy)


def resolve_case(strategy: Union[NamingCase, str]) -> NamingCase:
    """Turn a case setting ('camel', 'pascalCase', NamingCase...) into a NamingCase."""
    if isinstance(strategy, NamingCase):
        return strategy

    value = str(strategy).strip()
    # Accept the camelCase spelling used by older configs: pascalCase, snakeCase
    value = re.sub(r'case$', '', value, flags=re.IGNORECASE).lower()
    try:
        return NamingCase(value)
    except ValueError:
        raise ConfigError(
            f"Unsupported name resolver '{strategy}'. "
            f"Available options are: {', '.join(c.value for c in NamingCase)}"
        ) from None


@dataclass(frozen=True)
class NameStrategies:
    """Naming strategy per entity kind, resolved once per run."""

    content_type: NameStrategy = NamingCase.PASCAL_CASE
    content_type_file: NameStrategy = NamingCase.SNAKE_CASE
    snippet: NameStrategy = NamingCase.PASCAL_CASE
    snippet_file: NameStrategy = NamingCase.SNAKE_CASE
    taxonomy: NameStrategy = NamingCase.PASCAL_CASE
    taxonomy_file: NameStrategy = NamingCase.SNAKE_CASE
    element: NameStrategy = NamingCase.CAMEL_CASE

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "NameStrategies":
        """Pick the strategies given in config, keeping defaults for the rest."""
        defaults = cls()
        settings = {
            "content_type": config.content_type_resolver,
            "content_type_file": config.content_type_file_resolver,
            "snippet": config.snippet_resolver,
            "snippet_file": config.snippet_file_resolver,
            "taxonomy": config.taxonomy_resolver,
            "taxonomy_file": config.taxonomy_file_resolver,
            "element": config.element_resolver,
        }

        resolved = {}
        for key, setting in settings.items():
            if setting is None:
                resolved[key] = getattr(defaults, key)
            elif callable(setting):
                resolved[key] = setting
            else:
                resolved[key] = resolve_case(setting)
        return cls(**resolved)

    def non_default(self) -> Dict[str, str]:
        """Strategies that differ from the defaults, as labels."""
        defaults = NameStrategies()
        return {
            key: strategy_label(getattr(self, key))
            for key in self.__dataclass_fields__
            if getattr(self, key) != getattr(defaults, key)
        }


def _base_name(entity: Any) -> str:
    """Codename, falling back to the display name."""
    return entity.codename or entity.name or entity.id


class NameResolver:
    """
    Resolves names for one snapshot.

    Built-in strategies are collision-free: type names of taxonomies,
    snippets and content types share one namespace, file names are unique
    per folder (ignoring case) and field names are unique per owner. Names
    are assigned in codename order so the result does not depend on the
    order entities were fetched in. Custom functions are applied as-is.
    """

    def __init__(self, index: SchemaIndex, strategies: Optional[NameStrategies] = None,
                 module_style: ModuleStyle = ModuleStyle.BARE,
                 folders: Optional[Dict[type, str]] = None,
                 reserved_type_names: Iterable[str] = (),
                 reserved_file_names: Iterable[str] = (),
                 file_extension: str = ".ts",
                 import_extension: str = ".js"):
        self.index = index
        self.strategies = strategies or NameStrategies()
        self.module_style = module_style
        self.folders = folders or {}
        self.reserved_type_names = set(reserved_type_names)
        self.reserved_file_names = set(reserved_file_names)
        self.file_extension = file_extension
        self.import_extension = import_extension

        self._type_names: Dict[tuple, str] = {}
        self._file_names: Dict[tuple, str] = {}
        self._field_names: Dict[tuple, Dict[str, Optional[str]]] = {}
        self._assign_entity_names()

    # Entity kinds are processed in this order when resolving collisions
    _KIND_ORDER = (
        (TaxonomyGroup, "taxonomy"),
        (ContentTypeSnippet, "snippet"),
        (ContentType, "content_type"),
    )

    def _entities_of(self, entity_class: type):
        if entity_class is TaxonomyGroup:
            entities = self.index.taxonomies
        elif entity_class is ContentTypeSnippet:
            entities = self.index.snippets
        else:
            entities = self.index.types
        return sorted(entities, key=lambda e: (_base_name(e), e.id))

    def _assign_entity_names(self):
        type_sanitizer = NameSanitizer(self.reserved_type_names, identifiers=True)
        # File names only collide within one folder
        file_sanitizers: Dict[str, NameSanitizer] = {}

        for entity_class, key in self._KIND_ORDER:
            name_strategy = getattr(self.strategies, key)
            file_strategy = getattr(self.strategies, f"{key}_file")
            folder = self.folders.get(entity_class, "")
            if folder not in file_sanitizers:
                file_sanitizers[folder] = NameSanitizer(
                    self.reserved_file_names, identifiers=False, case_insensitive=True
                )
            file_sanitizer = file_sanitizers[folder]

            for entity in self._entities_of(entity_class):
                entity_key = (entity_class, entity.id)
                self._type_names[entity_key] = self._apply(
                    name_strategy, entity, type_sanitizer
                )
                self._file_names[entity_key] = self._apply(
                    file_strategy, entity, file_sanitizer
                )

        logger.debug("Resolved names for %d entities", len(self._type_names))

    def _apply(self, strategy: NameStrategy, entity: Any,
               sanitizer: Optional[NameSanitizer] = None) -> str:
        if isinstance(strategy, NamingCase):
            if sanitizer is None:
                return convert_case(_base_name(entity), strategy)
            return sanitizer.sanitize_name(_base_name(entity), strategy)

        name = strategy(entity)
        if not name:
            raise ConfigError(
                f"Custom name resolver returned no name for '{_base_name(entity)}'"
            )
        return name

    def _entity_kind(self, entity: Any) -> tuple:
        for entity_class, kind in self._KIND_ORDER:
            if type(entity) is entity_class:
                return entity_class, kind
        raise TypeError(f"Cannot name entity of type {type(entity).__name__}")

    def type_name(self, entity: Any) -> str:
        """Generated type name of a content type, snippet or taxonomy group."""
        entity_class, kind = self._entity_kind(entity)
        name = self._type_names.get((entity_class, entity.id))
        if name is None:
            # Not part of the index, nothing to collide with
            name = self._apply(getattr(self.strategies, kind), entity)
        return name

    def file_name(self, entity: Any) -> str:
        """File name without extension."""
        entity_class, kind = self._entity_kind(entity)
        name = self._file_names.get((entity_class, entity.id))
        if name is None:
            name = self._apply(getattr(self.strategies, f"{kind}_file"), entity)
        return name

    def module_file_name(self, entity: Any) -> str:
        """File name as written to disk."""
        return f"{self.file_name(entity)}{self.file_extension}"

    def folder(self, entity: Any) -> str:
        return self.folders.get(type(entity), "")

    def module_path(self, entity: Any) -> str:
        """Path of the generated file relative to the output directory."""
        return posixpath.join(self.folder(entity), self.module_file_name(entity))

    def import_path(self, from_entity: Any, to_entity: Any) -> str:
        """Relative import specifier from one generated file to another."""
        target = posixpath.join(self.folder(to_entity), self.file_name(to_entity))
        path = posixpath.relpath(target, self.folder(from_entity) or ".")
        if not path.startswith("."):
            path = f"./{path}"
        if self.module_style == ModuleStyle.EXTENSION:
            path = f"{path}{self.import_extension}"
        return path

    def field_name(self, element: Element, owner: Optional[ElementGroup] = None) -> Optional[str]:
        """
        Field name for an element, or None when the element should be skipped.

        Args:
            element: Element to name
            owner: Content type or snippet the element belongs to
        """
        strategy = self.strategies.element
        if not isinstance(strategy, NamingCase):
            return strategy(element) or None

        if owner is None:
            return convert_case(_base_name(element), strategy) or None

        owner_key = (type(owner), owner.id)
        if owner_key not in self._field_names:
            sanitizer = NameSanitizer(identifiers=True)
            self._field_names[owner_key] = {
                e.id: sanitizer.sanitize_name(_base_name(e), strategy)
                for e in sorted(owner.elements, key=lambda e: (_base_name(e), e.id))
            }
        names = self._field_names[owner_key]
        if element.id in names:
            return names[element.id]
        return convert_case(_base_name(element), strategy) or None

"""
Kontent.ai model generation.

Generates TypeScript models from content types, snippets and taxonomies.
"""

from .registry import GeneratorRegistry, RegistryError, get_generator, list_supported_sdk_types
from .reporter import ConsoleReporter, GenerationReporter
from .core.generator import (
    CodeGenerator,
    EntityProcessingError,
    GenerationResult,
    GeneratorError,
)
from .core.schema import SchemaSnapshot, parse_snapshot
from .core.index import SchemaIndex, UnresolvedReferenceError
from .core.config import ConfigError, GeneratorConfig, ConfigManager, load_config
from .languages.typescript import InvalidElementError


def generate_models(snapshot, config=None, reporter=None) -> GenerationResult:
    """
    Generate model files for a schema snapshot.

    Args:
        snapshot: SchemaSnapshot, or a raw dict with types/snippets/taxonomies
        config: GeneratorConfig, config dict or path to a JSON config file
        reporter: GenerationReporter notified about progress

    Returns:
        GenerationResult listing written files
    """
    if isinstance(snapshot, dict):
        snapshot = parse_snapshot(snapshot)

    if config is None or isinstance(config, dict):
        config = load_config(custom_config=config)
    elif not isinstance(config, GeneratorConfig):
        config = load_config(config_file=config)

    generator = get_generator(config.sdk_type, config, reporter)
    return generator.generate(snapshot)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "EntityProcessingError",
    "UnresolvedReferenceError",
    "InvalidElementError",
    "SchemaIndex",
    "SchemaSnapshot",
    "parse_snapshot",
    "ConfigError",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "ConsoleReporter",
    "GenerationReporter",
    "generate_models",
    "get_generator",
    "list_supported_sdk_types",
]

"""
Generator registry keyed by SDK type.

Maps the `sdk_type` setting to the generator producing models for that SDK.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path
from .core.generator import CodeGenerator, GeneratorError
from .core.config import GeneratorConfig, load_config


class RegistryError(GeneratorError):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available model generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        sdk_type: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for an SDK type.

        Args:
            sdk_type: Primary SDK type name (e.g., 'delivery')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this SDK type
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or an alias conflicts
        """
        if not issubclass(generator_class, CodeGenerator):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        key = sdk_type.lower()

        if key in self._generators and not replace:
            return

        self._generators[key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == key:
                continue

            if not replace and (
                alias_key in self._generators
                or self._aliases.get(alias_key, key) != key
            ):
                raise RegistryError(f"Alias '{alias}' is already registered")

            self._aliases[alias_key] = key

    def unregister(self, sdk_type: str):
        """Unregister a generator and its aliases."""
        key = sdk_type.lower()
        self._generators.pop(key, None)

        for alias in [a for a, target in self._aliases.items() if target == key]:
            del self._aliases[alias]

    def get_generator_class(self, sdk_type: str) -> Type[CodeGenerator]:
        """
        Get generator class for an SDK type or alias.

        Raises:
            RegistryError: If the SDK type is not supported
        """
        key = sdk_type.lower()
        key = self._aliases.get(key, key)

        if key in self._generators:
            return self._generators[key]

        raise RegistryError(
            f"Unsupported sdk type '{sdk_type}'. "
            f"Available: {', '.join(self.list_sdk_types())}"
        )

    def create_generator(
        self,
        sdk_type: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
        reporter=None,
    ) -> CodeGenerator:
        """
        Create generator instance for an SDK type.

        Args:
            sdk_type: SDK type name
            config: Configuration as GeneratorConfig, dict, or file path
            reporter: Optional GenerationReporter

        Returns:
            Configured generator instance
        """
        generator_class = self.get_generator_class(sdk_type)

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(custom_config=config)
        elif config is None:
            final_config = load_config()
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        return generator_class(final_config, reporter)

    def list_sdk_types(self) -> List[str]:
        """Get list of registered primary SDK type names."""
        return sorted(self._generators.keys())

    def is_supported(self, sdk_type: str) -> bool:
        key = sdk_type.lower()
        return key in self._generators or key in self._aliases


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the generators shipped with the package."""
    from .languages.typescript import DeliveryModelGenerator

    registry.register("delivery", DeliveryModelGenerator, aliases=["delivery-sdk"])


def get_generator(
    sdk_type: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    reporter=None,
) -> CodeGenerator:
    """Get generator instance from the global registry."""
    return get_registry().create_generator(sdk_type, config, reporter)


def list_supported_sdk_types() -> List[str]:
    """List all supported SDK types from the global registry."""
    return get_registry().list_sdk_types()


def is_sdk_type_supported(sdk_type: str) -> bool:
    """Check if an SDK type is supported by the global registry."""
    return get_registry().is_supported(sdk_type)

"""
Configuration management for model generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import re
from pathlib import Path
from typing import Dict, Any, Optional, Union, Callable
from dataclasses import dataclass, field, fields


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


NameStrategySetting = Union[None, str, Callable[..., Optional[str]]]

# Config keys that hold naming strategies (case name or callable)
RESOLVER_KEYS = (
    "content_type_resolver",
    "content_type_file_resolver",
    "snippet_resolver",
    "snippet_file_resolver",
    "taxonomy_resolver",
    "taxonomy_file_resolver",
    "element_resolver",
)

VALID_CASES = {"camel", "pascal", "snake", "kebab"}
VALID_MODULE_STYLES = {"bare", "extension"}


@dataclass
class GeneratorConfig:
    """Configuration for a model generation run."""

    # Project access
    project_id: Optional[str] = None
    api_key: Optional[str] = None
    base_url: str = "https://manage.kontent.ai/v2"
    sdk_type: str = "delivery"

    # Output settings
    output_dir: str = "."
    type_folder_name: str = "content-types"
    snippet_folder_name: str = "content-type-snippets"
    taxonomy_folder_name: str = "taxonomies"
    module_style: str = "bare"  # bare, extension
    add_timestamp: bool = False
    generate_taxonomies: bool = True
    generate_barrels: bool = True

    # Naming strategies: case name, callable or None for the default
    content_type_resolver: NameStrategySetting = None
    content_type_file_resolver: NameStrategySetting = None
    snippet_resolver: NameStrategySetting = None
    snippet_file_resolver: NameStrategySetting = None
    taxonomy_resolver: NameStrategySetting = None
    taxonomy_file_resolver: NameStrategySetting = None
    element_resolver: NameStrategySetting = None

    # Formatter overrides, see FormatOptions
    format_options: Optional[Dict[str, Any]] = None

    # Custom settings (generator-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "sdk_type": "delivery",
            "module_style": "bare",
            "add_timestamp": False,
        }

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = self._defaults.copy()

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        # None means "not given" for overrides coming from the CLI
        if custom_config:
            base_config.update(
                {k: v for k, v in custom_config.items() if v is not None}
            )

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get('custom') or {})
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file; callables and secrets are left out."""
        path = Path(output_path)

        config_dict = {}
        for f in fields(GeneratorConfig):
            if f.name in ("custom", "api_key"):
                continue
            value = getattr(config, f.name)
            if callable(value):
                continue
            config_dict[f.name] = value

        config_dict.update(config.custom)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}") from e

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        for key in RESOLVER_KEYS:
            value = getattr(config, key)
            if value is None or callable(value):
                continue
            # pascalCase and pascal are both accepted
            case_name = re.sub(r'case$', '', str(value).strip(), flags=re.IGNORECASE)
            if case_name.lower() not in VALID_CASES:
                warnings.append(f"Invalid {key}: {value}")

        if config.module_style not in VALID_MODULE_STYLES:
            warnings.append(f"Invalid module_style: {config.module_style}")

        for folder_key in ("type_folder_name", "snippet_folder_name", "taxonomy_folder_name"):
            folder = getattr(config, folder_key)
            if folder and (folder.startswith("/") or ".." in Path(folder).parts):
                warnings.append(f"{folder_key} must be a relative folder: {folder}")

        return warnings

    def require_valid(self, config: GeneratorConfig, needs_project: bool = True):
        """
        Fail fast on configuration problems before anything is fetched.

        Raises:
            ConfigError: If the project id is missing or validation fails
        """
        if needs_project and not config.project_id:
            raise ConfigError("Please provide project id using 'project_id' setting")

        warnings = self.validate_config(config)
        if warnings:
            raise ConfigError("; ".join(warnings))


# Global configuration manager instance
_config_manager = None

def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)

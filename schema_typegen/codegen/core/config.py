"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
import re
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields, asdict

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


class UnknownOptionError(ConfigError):
    """A shape selector or representation option has an unrecognized value."""

    def __init__(self, option: str, value: Any):
        self.option = option
        self.value = value
        super().__init__(f"Unknown {option}: {value}")


MODEL_TYPES = ("interface", "type")
ENUM_TYPES = ("stringUnion", "enum", "object")

DATE_REPRESENTATIONS = ("Date", "string", "number")
BIGINT_REPRESENTATIONS = ("bigint", "string", "number")
DECIMAL_REPRESENTATIONS = ("Decimal", "string", "number")
BYTES_REPRESENTATIONS = ("Buffer", "BufferObject", "string", "number[]")

DEFAULT_HEADER_COMMENT = "This file was auto-generated by schema-typegen"


@dataclass
class GeneratorConfig:
    """Rendering options shared by every generator of one run."""

    # Naming affixes
    enum_prefix: str = ""
    enum_suffix: str = ""
    model_prefix: str = ""
    model_suffix: str = ""
    type_prefix: str = ""
    type_suffix: str = ""

    # Inline type annotations
    namespace: Optional[str] = None
    namespace_type: Optional[str] = None
    use_type: Optional[str] = None

    # Output shapes
    header_comment: str = DEFAULT_HEADER_COMMENT
    model_type: str = "interface"  # interface, type
    enum_type: str = "stringUnion"  # stringUnion, enum, object

    # Scalar representations; date_type also accepts "A | B"
    date_type: str = "Date"
    big_int_type: str = "bigint"
    decimal_type: str = "Decimal"
    bytes_type: str = "Buffer"

    # Injected raw code
    prefix_code: Optional[str] = None
    suffix_code: Optional[str] = None

    # Output settings
    output: Optional[str] = None
    zod_output: Optional[str] = None
    pg_output: Optional[str] = None
    pg_env_var: str = "DATABASE_URL"

    # Policies
    optional_relations: bool = True
    omit_relations: bool = False
    optional_nullables: bool = False
    format_output: bool = False
    strict_validation_scalars: bool = False

    # Unrecognized settings
    custom: Dict[str, Any] = field(default_factory=dict)


# camelCase keys used by the schema compiler's generator block
CONFIG_ALIASES = {
    "prettier": "format_output",
}


def _to_snake_case(name: str) -> str:
    """Convert a camelCase option name to snake_case."""
    if name in CONFIG_ALIASES:
        return CONFIG_ALIASES[name]
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name).lower()


def _coerce_bool(value: Any) -> Any:
    """Generator blocks pass every option as a string."""
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

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
        # Start with defaults
        base_config = dict(self._defaults)
        base_config["custom"] = {}

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(self.normalize_keys(file_config))

        # Apply custom overrides
        if custom_config:
            base_config.update(self.normalize_keys(custom_config))

        return self._dict_to_config(base_config)

    def normalize_keys(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Accept camelCase and snake_case keys alike."""
        return {_to_snake_case(key): value for key, value in config_dict.items()}

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
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name: f for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key == "custom":
                continue
            if key in known_fields:
                default = known_fields[key].default
                config_args[key] = _coerce_bool(value) if isinstance(default, bool) else value
            else:
                custom_args[key] = value

        custom = dict(config_dict.get("custom") or {})
        custom.update(custom_args)
        config_args["custom"] = custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.model_type not in MODEL_TYPES:
            warnings.append(f"Invalid model_type: {config.model_type}")

        if config.enum_type not in ENUM_TYPES:
            warnings.append(f"Invalid enum_type: {config.enum_type}")

        representations = {
            "date_type": (config.date_type, DATE_REPRESENTATIONS),
            "big_int_type": (config.big_int_type, BIGINT_REPRESENTATIONS),
            "decimal_type": (config.decimal_type, DECIMAL_REPRESENTATIONS),
            "bytes_type": (config.bytes_type, BYTES_REPRESENTATIONS),
        }
        for option, (value, allowed) in representations.items():
            parts = [part.strip() for part in value.split("|")]
            if len(parts) > 2 or any(part not in allowed for part in parts):
                warnings.append(f"Unusual {option}: {value}")

        if config.use_type and not config.namespace:
            warnings.append("use_type is set but namespace is not")

        if config.omit_relations and config.optional_relations:
            warnings.append("optional_relations has no effect when omit_relations is set")

        for key in config.custom:
            warnings.append(f"Unrecognized option: {key}")

        return warnings


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


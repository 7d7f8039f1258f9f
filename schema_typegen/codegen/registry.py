"""
Generator registry for the available output targets.

Maps target names and their aliases to generator classes.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path
from .core.generator import CodeGenerator
from .core.config import GeneratorConfig, load_config


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available code generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        target: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a target.

        Args:
            target: Primary target name (e.g., 'typescript', 'zod')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this target
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or an alias conflicts
        """
        if not issubclass(generator_class, CodeGenerator):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        target_key = target.lower()

        if target_key in self._generators and not replace:
            return

        self._generators[target_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == target_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary target"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != target_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = target_key

    def unregister(self, target: str):
        """Unregister a generator and its aliases."""
        target_key = target.lower()
        self._generators.pop(target_key, None)

        for alias in [a for a, t in self._aliases.items() if t == target_key]:
            del self._aliases[alias]

    def resolve(self, target: str) -> str:
        """
        Resolve a target name or alias to its primary name.

        Raises:
            RegistryError: If the target is not registered
        """
        target_key = target.lower()
        if target_key in self._generators:
            return target_key
        if target_key in self._aliases:
            return self._aliases[target_key]

        raise RegistryError(
            f"No generator registered for target: {target}. "
            f"Available: {', '.join(self.list_targets())}"
        )

    def get_generator_class(self, target: str) -> Type[CodeGenerator]:
        """Get generator class for a target name or alias."""
        return self._generators[self.resolve(target)]

    def create_generator(
        self,
        target: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    ) -> CodeGenerator:
        """
        Create generator instance for a target.

        Args:
            target: Target name or alias
            config: Configuration as GeneratorConfig, dict, or file path

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If the target is unknown or the config is invalid
        """
        generator_class = self.get_generator_class(target)

        try:
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
        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {target} generator: {e}") from e

        return generator_class(final_config)

    def list_targets(self) -> List[str]:
        """Get list of registered primary target names."""
        return sorted(self._generators.keys())

    def get_aliases(self, target: str) -> List[str]:
        """Get all aliases for a primary target."""
        target_key = target.lower()
        return sorted(alias for alias, t in self._aliases.items() if t == target_key)

    def is_supported(self, target: str) -> bool:
        """Check if a target name or alias is registered."""
        target_key = target.lower()
        return target_key in self._generators or target_key in self._aliases

    def get_target_info(self, target: str) -> Dict[str, Any]:
        """
        Get information about a registered target.

        Raises:
            RegistryError: If target not found
        """
        target_key = self.resolve(target)
        generator = self._generators[target_key](GeneratorConfig())

        return {
            "name": generator.language_name,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases(target_key),
            "module": type(generator).__module__,
        }


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
    """Register the built-in targets with their aliases."""
    from .languages.typescript import TypeScriptGenerator
    from .languages.zod import ZodGenerator
    from .languages.pg import PgGenerator

    registry.register("typescript", TypeScriptGenerator, aliases=["ts"])
    registry.register("zod", ZodGenerator)
    registry.register("pg", PgGenerator, aliases=["postgres", "sql"])


# Public API functions using the global registry


def register_generator(
    target: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    """Register a generator in the global registry."""
    get_registry().register(target, generator_class, aliases)


def get_generator(
    target: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> CodeGenerator:
    """
    Get generator instance from global registry.

    Args:
        target: Target name or alias
        config: Configuration

    Returns:
        Generator instance
    """
    return get_registry().create_generator(target, config)


def list_supported_targets() -> List[str]:
    """List all supported targets from global registry."""
    return get_registry().list_targets()


def is_target_supported(target: str) -> bool:
    """Check if target is supported by global registry."""
    return get_registry().is_supported(target)


def get_target_info(target: str) -> Dict[str, Any]:
    """Get information about a supported target."""
    return get_registry().get_target_info(target)


def list_all_target_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all supported targets."""
    return {target: get_target_info(target) for target in list_supported_targets()}

"""
Name resolution for generated declarations.

Rendered identifiers are the raw datamodel names wrapped in the configured
affixes. The maps are built once per generation run and shared by every
emitter of that run through a GenerationContext.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from .config import GeneratorConfig
from .errors import NameCollisionError, SchemaMismatchError
from .schema import Datamodel


def apply_affixes(name: str, prefix: str = "", suffix: str = "") -> str:
    """Render a raw name with its prefix and suffix."""
    return f"{prefix}{name}{suffix}"


class NameResolver:
    """Builds the rendered-name maps for one datamodel."""

    def __init__(self, config: GeneratorConfig):
        """
        Initialize name resolver.

        Args:
            config: Configuration holding the affixes
        """
        self.config = config

    def build_map(self, names: Iterable[str], prefix: str, suffix: str) -> Dict[str, str]:
        """Map each raw name to its affixed form."""
        return {name: apply_affixes(name, prefix, suffix) for name in names}

    def model_names(self, datamodel: Datamodel) -> Dict[str, str]:
        """Rendered names for all models."""
        return self.build_map(
            (m.name for m in datamodel.models),
            self.config.model_prefix,
            self.config.model_suffix,
        )

    def enum_names(self, datamodel: Datamodel) -> Dict[str, str]:
        """Rendered names for all enums."""
        return self.build_map(
            (e.name for e in datamodel.enums),
            self.config.enum_prefix,
            self.config.enum_suffix,
        )

    def type_names(self, datamodel: Datamodel) -> Dict[str, str]:
        """Rendered names for all composite types."""
        return self.build_map(
            (t.name for t in datamodel.types),
            self.config.type_prefix,
            self.config.type_suffix,
        )

    @staticmethod
    def check_collisions(*name_maps: Dict[str, str]) -> None:
        """
        Ensure no two raw names share a rendered identifier.

        Raises:
            NameCollisionError: On the first collision found
        """
        owners: Dict[str, List[str]] = {}
        for name_map in name_maps:
            for raw, rendered in name_map.items():
                owners.setdefault(rendered, []).append(raw)

        for rendered, raws in owners.items():
            if len(raws) > 1:
                raise NameCollisionError(rendered, raws)


@dataclass
class GenerationContext:
    """Mutable state owned by a single generation run."""

    config: GeneratorConfig
    model_names: Dict[str, str] = field(default_factory=dict)
    enum_names: Dict[str, str] = field(default_factory=dict)
    type_names: Dict[str, str] = field(default_factory=dict)
    used_custom_types: Set[str] = field(default_factory=set)

    @classmethod
    def build(cls, config: GeneratorConfig, datamodel: Datamodel) -> "GenerationContext":
        """Resolve all names of a datamodel into a fresh context."""
        resolver = NameResolver(config)
        model_names = resolver.model_names(datamodel)
        enum_names = resolver.enum_names(datamodel)
        type_names = resolver.type_names(datamodel)
        resolver.check_collisions(model_names, enum_names, type_names)

        return cls(
            config=config,
            model_names=model_names,
            enum_names=enum_names,
            type_names=type_names,
        )

    def declaration_name(self, raw_name: str) -> str:
        """Rendered name of a model or composite type declaration."""
        name = self.model_names.get(raw_name) or self.type_names.get(raw_name)
        if name is None:
            raise SchemaMismatchError(f"Could not find name for model {raw_name}")
        return name

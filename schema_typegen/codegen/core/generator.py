"""
Base generator interface for all code generation targets.

Defines the contract that all target generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import GeneratorError, SchemaMismatchError, NameCollisionError
from .naming import GenerationContext
from .schema import Datamodel, FieldKind
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)

__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "NameCollisionError",
    "SchemaMismatchError",
    "generate_code",
]


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self.last_context: Optional[GenerationContext] = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target (e.g., 'typescript', 'zod')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    @abstractmethod
    def get_template_directory(self) -> Path:
        """Return the directory containing templates for this generator."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def generate(self, datamodel: Datamodel) -> str:
        """
        Generate code for a whole datamodel.

        A fresh GenerationContext is built for every call, so runs never
        share name maps or custom-type usage.

        Args:
            datamodel: Models, enums, and composite types to generate

        Returns:
            Generated code as a string
        """
        context = GenerationContext.build(self.config, datamodel)
        self.last_context = context
        logger.debug(
            "Generating %s for %d models, %d enums, %d types",
            self.language_name,
            len(datamodel.models),
            len(datamodel.enums),
            len(datamodel.types),
        )
        return self.render(datamodel, context)

    @abstractmethod
    def render(self, datamodel: Datamodel, context: GenerationContext) -> str:
        """
        Render the complete output file.

        Args:
            datamodel: Datamodel to render
            context: Per-run name maps and usage tracking

        Returns:
            Generated code
        """
        pass

    def validate_datamodel(self, datamodel: Datamodel) -> List[str]:
        """
        Validate a datamodel for basic structural issues.

        Target generators should override this to add their own checks.

        Args:
            datamodel: Datamodel to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for model in datamodel.models + datamodel.types:
            if not model.fields:
                warnings.append(f"Model '{model.name}' has no fields")

            for field in model.fields:
                if field.kind == FieldKind.UNSUPPORTED:
                    warnings.append(
                        f"Unsupported type in {model.name}.{field.name}: {field.type}"
                    )

        for enum in datamodel.enums:
            if not enum.values:
                warnings.append(f"Enum '{enum.name}' has no values")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:  # Allow a single blank line
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, datamodel: Datamodel) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Generation is all-or-nothing: on any failure the result carries no code.

    Args:
        generator: Code generator instance
        datamodel: Datamodel to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_datamodel(datamodel)

        code = generator.generate(datamodel)

        if generator.config.format_output:
            code = generator.format_code(code)

        context = generator.last_context
        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            **datamodel.get_summary(),
            "custom_types": sorted(context.used_custom_types) if context else [],
        }

        return GenerationResult(code, warnings, metadata)

    except Exception as e:
        logger.error("%s generation failed: %s", generator.language_name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)

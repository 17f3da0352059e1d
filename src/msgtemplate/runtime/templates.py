"""Template function registry.

Template calls in a message (``{{PLURAL:$1|one|many}}``) are rendered by
Python functions registered under the template name. This module keeps the
name -> function mapping; the language rules a function needs arrive as the
``language`` argument, supplied by whoever configured the emitter.

Template function calling convention:

    def plural(args: Sequence[str], language: object, /) -> str

``args`` are the call's arguments already rendered to text, in order.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol

from msgtemplate.diagnostics import ErrorTemplate, TemplateFunctionError, TemplateNotFoundError

__all__ = ["TemplateFunction", "TemplateRegistry", "TemplateSignature", "normalize_template_name"]


class TemplateFunction(Protocol):
    """Protocol for template functions.

    Functions must accept:
    - args: The rendered arguments of the template call (positional)
    - language: The caller-supplied language table, or None (positional)

    And return the rendered text.
    """

    def __call__(self, args: Sequence[str], language: object, /) -> str:
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class TemplateSignature:
    """Registered template metadata.

    Attributes:
        python_name: Function name in Python
        template_name: Normalized template name (upper-case, stripped)
        callable: The actual Python function
    """

    python_name: str
    template_name: str
    callable: Callable[[Sequence[str], object], str]


def normalize_template_name(name: str) -> str:
    """Normalize a template name for lookup.

    Template names are case-insensitive and surrounding spaces are not
    significant: ``{{ plural:$1|...}}`` calls the PLURAL template.

    Example:
        >>> normalize_template_name(" Plural")
        'PLURAL'
    """
    return name.strip().upper()


class TemplateRegistry:
    """Maps template names to template functions.

    Supports dict-like introspection:
        - __iter__: Iterate over template names
        - __len__: Count registered templates
        - __contains__: Check if a template exists (supports 'in' operator)

    Example:
        >>> registry = TemplateRegistry()
        >>> registry.register(lambda args, language: args[0].upper(), name="UC")
        >>> "uc" in registry
        True
        >>> registry.call("UC", ["hello"], None)
        'HELLO'
    """

    __slots__ = ("_templates",)

    def __init__(self) -> None:
        """Initialize empty template registry."""
        self._templates: dict[str, TemplateSignature] = {}

    def register(
        self,
        func: Callable[[Sequence[str], object], str],
        *,
        name: str | None = None,
    ) -> None:
        """Register a Python function as a template.

        Args:
            func: Template function
            name: Template name (default: func.__name__.upper())

        Raises:
            ValueError: If the name is empty after normalization

        Example:
            >>> def sitename(args, language):
            ...     return "Wikipedia"
            >>> registry = TemplateRegistry()
            >>> registry.register(sitename)
            >>> "SITENAME" in registry
            True
        """
        python_name = getattr(func, "__name__", "unknown")
        template_name = normalize_template_name(name if name is not None else python_name)
        if not template_name:
            msg = "Template name must not be empty"
            raise ValueError(msg)

        self._templates[template_name] = TemplateSignature(
            python_name=python_name,
            template_name=template_name,
            callable=func,
        )

    def call(self, name: str, args: Sequence[str], language: object) -> str:
        """Call the template function registered under ``name``.

        Args:
            name: Template name as written in the message
            args: Rendered template arguments
            language: Language table handed to the function

        Returns:
            Rendered text

        Raises:
            TemplateNotFoundError: If no template is registered under name
            TemplateFunctionError: If the function rejects its arguments
        """
        template_name = normalize_template_name(name)
        if template_name not in self._templates:
            raise TemplateNotFoundError(
                ErrorTemplate.template_not_found(name), template_name=template_name
            )

        signature = self._templates[template_name]

        # Only TypeError, ValueError and IndexError are argument problems
        # (wrong count, bad value, missing form). Anything else is a bug in
        # the template function and propagates.
        try:
            return str(signature.callable(args, language))
        except (TypeError, ValueError, IndexError) as e:
            raise TemplateFunctionError(
                ErrorTemplate.template_failed(template_name, str(e))
            ) from e

    def get_template_info(self, name: str) -> TemplateSignature | None:
        """Get metadata for a registered template, or None."""
        return self._templates.get(normalize_template_name(name))

    def __iter__(self) -> Iterator[str]:
        """Iterate over registered template names."""
        return iter(self._templates)

    def __len__(self) -> int:
        """Number of registered templates."""
        return len(self._templates)

    def __contains__(self, name: object) -> bool:
        """Check if a template is registered (case-insensitive)."""
        return isinstance(name, str) and normalize_template_name(name) in self._templates

    def __repr__(self) -> str:
        """Return registry representation listing template names."""
        return f"TemplateRegistry(templates={sorted(self._templates)!r})"

    def copy(self) -> "TemplateRegistry":
        """Create a shallow copy of this registry.

        Lets an emitter own its registry so later registrations on the
        source registry do not leak into it.
        """
        new_registry = TemplateRegistry()
        new_registry._templates = self._templates.copy()
        return new_registry

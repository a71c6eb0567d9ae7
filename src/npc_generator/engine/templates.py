"""Sentence templates rendered with Jinja2.

Templates are small, data-supplied strings (name formats, lineage and
description sentences), so they run in a sandbox and any unknown
variable is an error instead of an empty string.
"""

from __future__ import annotations

from typing import Any

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from npc_generator.core.exceptions import TemplateRenderError
from npc_generator.core.logging import get_logger


logger = get_logger(__name__)


class TemplateEngine:
    """Renders template sources with named values.

    One engine is created by the caller and handed to every generator
    that needs it. The underlying environment is read-only after
    construction and can be shared between threads.

    Example:
        >>> engine = TemplateEngine()
        >>> engine.render("{{ first_name }} {{ surname }}", first_name="Ada", surname="Reed")
        'Ada Reed'
    """

    def __init__(self) -> None:
        self._environment = SandboxedEnvironment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=False,
        )

    def render(self, source: str, **values: Any) -> str:
        """Render a template source.

        Args:
            source: Jinja2 template text.
            **values: Variables available to the template.

        Returns:
            The rendered text.

        Raises:
            TemplateRenderError: If the template does not compile, uses an
                undefined variable, or fails while rendering.
        """
        try:
            template = self._environment.from_string(source)
        except TemplateError as e:
            logger.error("Template compilation failed", error=str(e))
            raise TemplateRenderError(
                f"Failed to compile template: {e}",
                template=source,
            ) from e

        try:
            return template.render(**values)
        except Exception as e:
            logger.error("Template rendering failed", error=str(e))
            raise TemplateRenderError(
                f"Failed to render template: {e}",
                template=source,
            ) from e


__all__ = ["TemplateEngine"]

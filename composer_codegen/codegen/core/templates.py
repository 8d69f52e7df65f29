"""
Jinja2 rendering of the boilerplate written at the top of every generated file.

Built-in templates live in memory. A template directory, when given, is
searched first so a project can replace the license header without touching
the generators.
"""

from pathlib import Path
from typing import Any, Dict, List, Union

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, StrictUndefined
from jinja2.exceptions import TemplateError as Jinja2Error


class TemplateError(Exception):
    """Raised when a template is missing or fails to render."""

    pass


FILE_HEADER = "file_header.java.j2"

FILE_HEADER_TEMPLATE = """\
/*
{% for line in license_lines %}
 *{{ (" " ~ line) if line else "" }}
{% endfor %}
 */

// {{ generated_warning }}
package {{ package_name }};
"""

BUILTIN_TEMPLATES = {
    FILE_HEADER: FILE_HEADER_TEMPLATE,
}


class TemplateEngine:
    """Renders named templates to text or to lists of lines."""

    def __init__(self, template_dir: Union[str, Path, None] = None):
        self.template_dir = Path(template_dir) if template_dir else None
        self._builtins = DictLoader(dict(BUILTIN_TEMPLATES))

        loaders = [self._builtins]
        if self.template_dir is not None:
            loaders.insert(0, FileSystemLoader(str(self.template_dir)))

        # Java output: no HTML escaping, undefined variables are errors
        self._env = Environment(
            loader=ChoiceLoader(loaders),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        try:
            return self._env.get_template(template_name).render(**context)
        except Jinja2Error as e:
            raise TemplateError(f"Cannot render template {template_name}: {e}") from e

    def render_lines(self, template_name: str, context: Dict[str, Any]) -> List[str]:
        """Render a template and split the output into lines without terminators."""
        return self.render_template(template_name, context).splitlines()

    def template_exists(self, template_name: str) -> bool:
        return template_name in self._env.list_templates()

    def add_template(self, name: str, content: str):
        """Register an in-memory template; files in template_dir still take precedence."""
        self._builtins.mapping[name] = content


_default_engine = None


def get_default_template_engine() -> TemplateEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = TemplateEngine()
    return _default_engine

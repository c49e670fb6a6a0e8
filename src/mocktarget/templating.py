"""HTML rendering for the markup endpoints.

Handlers return a ``Template`` instead of building markup by string
concatenation; content negotiation renders it through kida. The
templates live in-process in a ``DictLoader``, there is no template
directory to configure.
"""

from dataclasses import dataclass, field
from typing import Any

from kida import DictLoader, Environment

HTML_STATUS_TEMPLATE = """\
<!DOCTYPE html><html><head><title>{{ title }}</title></head><body>
      <h1>Service Status</h1>
      <div class="status {{ css_class }}">
        <!-- STATUS: {{ marker }} -->
        <p>Current Status: <strong>{{ label }}</strong></p>
      </div>
      <p>Last updated: {{ updated }}</p>
    </body></html>"""

TEMPLATES: dict[str, str] = {
    "html_status.html": HTML_STATUS_TEMPLATE,
}


@dataclass(frozen=True, slots=True)
class Template:
    """Render a named template with the given context.

    Usage::

        return Template("html_status.html", title="Mock Server", label="Operational")
    """

    name: str
    context: dict[str, Any] = field(default_factory=dict)

    def __init__(self, name: str, /, **context: Any) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "context", context)


def create_environment(templates: dict[str, str] | None = None) -> Environment:
    """Create the kida environment holding the built-in templates."""
    return Environment(loader=DictLoader(templates or TEMPLATES))


def render_template(env: Environment, template: Template) -> str:
    """Render *template* against *env*."""
    return env.get_template(template.name).render(template.context)

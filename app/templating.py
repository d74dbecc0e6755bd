# =============================================================================
# app/templating.py - Jinja2 Page Rendering
# =============================================================================
# Pages are rendered to plain strings so the public ones can be stored in
# the page cache as-is.
#
# Every template receives `session` (the current AdminSession or None) as
# its auth context, plus `site_url`.
# =============================================================================

from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.auth.models import AdminSession
from app.config import settings
from lib.markdown import is_safe_url

TEMPLATES_DIR = Path(__file__).parent / "templates"

jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _format_date(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "strftime"):
        return value.strftime("%B %d, %Y")
    return str(value)[:10]


def _safe_href(value: Any) -> str:
    url = str(value or "")
    return url if url and is_safe_url(url) else "#"


jinja_env.filters["date"] = _format_date
jinja_env.filters["safe_href"] = _safe_href


def render_page(template_name: str, session: Optional[AdminSession] = None, **context: Any) -> str:
    """Render a template with the shared page context."""
    template = jinja_env.get_template(template_name)
    return template.render(session=session, site_url=settings.site_url, **context)

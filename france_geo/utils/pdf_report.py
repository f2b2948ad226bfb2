from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATES_DIR = Path(__file__).parent / "templates"


def format_thousands(value: int) -> str:
    """2165423 -> '2,165,423'"""
    return f"{value:,}"


env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    undefined=StrictUndefined,
)
env.filters["thousands"] = format_thousands


def render_html(template_name: str, context: Dict) -> str:
    """Render a template to an HTML string."""
    template = env.get_template(template_name)
    return template.render(**context)


def render_pdf(template_name: str, context: Dict) -> bytes:
    """Render template to PDF and return bytes"""
    # WeasyPrint loads its native libraries on import
    from weasyprint import HTML

    html_content = render_html(template_name, context)
    return HTML(string=html_content, base_url=str(TEMPLATES_DIR)).write_pdf()

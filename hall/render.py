from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import HallEntry

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
REPORT_LIST_TEMPLATE = "report_list.html"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)


def render_report_list(project_name: str, reports: Sequence[HallEntry]) -> str:
    # newest first on the page; the store itself makes no ordering promise
    ordered = sorted(reports, key=lambda r: (r.date, r.id), reverse=True)
    tpl = _env.get_template(REPORT_LIST_TEMPLATE)
    return tpl.render(project_name=project_name, reports=ordered)

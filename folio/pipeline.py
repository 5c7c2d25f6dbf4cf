"""
The three generation flows: résumé upload, portfolio cloning, site generation.

Each one wires the pure core (parser_rule / cloner) to its collaborators
(document reader, fetcher, template store). Errors from the collaborators
propagate as FolioError subclasses; the core itself never fails.
"""

from __future__ import annotations
import logging
import uuid
from pathlib import Path
from typing import Any, Dict

from folio import config
from folio.cloner import convert_html_to_template
from folio.exceptions import TemplateNotFoundError, ValidationError
from folio.extractor import document_to_text
from folio.fetcher import collect_css, fetch_page, page_origin
from folio.generator_rule import TemplateStore, is_cloned
from folio.parser_rule import extract_resume_data

logger = logging.getLogger(__name__)


def parse_resume(path: str | Path) -> Dict[str, Any]:
    """Uploaded PDF/DOCX/TXT → profile record."""
    text = document_to_text(path)
    config.check_input_size(text)
    logger.debug("first 200 chars: %r", text[:200])
    return extract_resume_data(text)


def clone_portfolio(url: str, store: TemplateStore, session=None) -> Dict[str, Any]:
    """Fetch a live portfolio and save its design as a cloned template."""
    origin = page_origin(url)
    logger.info("cloning portfolio design from %s", url)
    html = fetch_page(url, session=session)
    css = collect_css(html, origin, session=session)

    skeleton = convert_html_to_template(html, origin, css)
    name = store.save_clone(skeleton, source_url=url)
    logger.info("detected sections: %s", skeleton.detected_sections)
    return {
        "clonedTemplateId": name,
        "sourceUrl": url,
        "detectedSections": dict(skeleton.detected_sections),
    }


def resolve_template(store: TemplateStore, template: str | None) -> str:
    name = template or config.DEFAULT_TEMPLATE
    if is_cloned(name):
        if not store.exists(name):
            raise TemplateNotFoundError(name)
        return name
    return name if store.exists(name) else config.DEFAULT_TEMPLATE


def generate_portfolio(
    payload: Dict[str, Any],
    store: TemplateStore,
    template: str | None = None,
    out_root: str | Path | None = None,
) -> Dict[str, Any]:
    """Render a profile into <out_root>/<uuid>/index.html + style.css."""
    if not payload.get("name") or payload.get("projects") is None:
        raise ValidationError("Missing required fields: name, projects")

    name = resolve_template(store, template or payload.get("template"))
    portfolio_id = str(uuid.uuid4())
    out_dir = Path(out_root or config.PORTFOLIOS_DIR) / portfolio_id

    logger.info("rendering template %s into %s", name, out_dir)
    index = store.render_to_dir(name, payload, out_dir)
    return {
        "portfolioId": portfolio_id,
        "portfolioUrl": f"/portfolios/{portfolio_id}/index.html",
        "path": str(index),
    }

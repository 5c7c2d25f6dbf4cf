"""
Uploaded résumé ➜ raw text
– PDF via pdfplumber, stripping `(cid:N)` glyph artifacts
– DOCX via python-docx
– suppresses verbose CropBox warnings from pdfplumber/pdfminer
"""
from __future__ import annotations
from pathlib import Path
import re, logging, warnings, pdfplumber
import docx

from folio.exceptions import DocumentReadError

# silence noisy PDF logging
logging.getLogger("pdfplumber").setLevel(logging.ERROR)
logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", category=UserWarning, module="pdfminer")

logger = logging.getLogger(__name__)

_CID_RE = re.compile(r"\(cid:\d+\)")
TEXT_SUFFIXES = {".txt", ".md"}


def pdf_to_text(pdf_path: str | Path) -> str:
    with pdfplumber.open(pdf_path) as pdf:
        pages = [p.extract_text() or "" for p in pdf.pages]
    return _CID_RE.sub("", "\n".join(pages))


def docx_to_text(docx_path: str | Path) -> str:
    document = docx.Document(str(docx_path))
    lines = [p.text for p in document.paragraphs]
    # résumé templates often lay the header out in tables
    for table in document.tables:
        for row in table.rows:
            lines.extend(cell.text for cell in row.cells)
    return "\n".join(lines)


def document_to_text(path: str | Path) -> str:
    """Dispatch on suffix; any reader failure becomes DocumentReadError."""
    path = Path(path)
    suffix = path.suffix.lower()
    if not path.is_file():
        raise DocumentReadError(str(path), "file not found")
    try:
        if suffix == ".pdf":
            text = pdf_to_text(path)
        elif suffix == ".docx":
            text = docx_to_text(path)
        elif suffix in TEXT_SUFFIXES:
            text = path.read_text(encoding="utf-8", errors="replace")
        else:
            raise DocumentReadError(str(path), f"unsupported file type {suffix or '(none)'}")
    except DocumentReadError:
        raise
    except Exception as exc:
        raise DocumentReadError(str(path), str(exc)) from exc

    logger.info("extracted %d characters from %s", len(text), path.name)
    return text

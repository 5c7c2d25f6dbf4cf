"""
Rule-based résumé parser.

Plain text (already pulled out of a PDF/DOCX) ➜ profile record. Every pass is
best-effort: a pass that finds nothing leaves its field at the empty default,
so any string – including "" – yields a complete record.
"""

from __future__ import annotations
import json, re
from typing import Dict, List

from folio.cleaner import collapse_ws
from folio.schema_profile import PROFILE_SCHEMA, PROJECT_SCHEMA
from folio.vocabulary import (
    ACTION_VERBS,
    BIO_HEADERS,
    PROJECT_HEADERS,
    ROLE_KEYWORDS,
    SECTION_BOUNDARY,
    SECTION_HEADER,
    SKILL_HEADERS,
    match_skills,
)

EMAIL    = re.compile(r"[\w.-]+@[\w.-]+\.[a-zA-Z]{2,}")
PHONE    = re.compile(r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
LINKEDIN = re.compile(r"linkedin\.com/in/([\w-]+)", re.I)
GITHUB   = re.compile(r"github\.com/([\w-]+)", re.I)
URL      = re.compile(r"https?://[^\s)]+")

_NAME_JUNK   = re.compile(r"[^\w\s.-]")
_URLISH      = re.compile(r"(http|www\.|\.com|\.org)", re.I)
_CONTACT     = re.compile(r"phone|email|address|linkedin|github", re.I)
_CONTACTISH  = re.compile(r"@|phone|http|www\.", re.I)
_ROLE_BULLET = re.compile(r"[•\-|]")
_HDR_PUNCT   = re.compile(r"[:\-•|#*_]")
_LEAD_PUNCT  = re.compile(r"^[\s•\-:]+")
_LEAD_BULLET = re.compile(r"^[\s•\-‣◦⁃∙]+")
_SKILL_SPLIT = re.compile(r"[,\n•|:;/]")
_SKILL_JUNK  = re.compile(r"[^\w\s.#+\-]")
_TITLE_SEP   = re.compile(r"[|–—]")
_TITLE_SPLIT = re.compile(r"\s*[|–—]\s*")

SECTION_SPAN   = 30   # lines a section may run without a closing header
MAX_PROJECTS   = 5
MAX_RAW_SKILLS = 20


def extract_resume_data(text: str | None) -> Dict:
    out = json.loads(json.dumps(PROFILE_SCHEMA))
    text = text or ""
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]

    # contact block
    if m := EMAIL.search(text):
        out["email"] = m.group()
    if m := PHONE.search(text):
        out["phone"] = m.group()
    if m := LINKEDIN.search(text):
        out["linkedin"] = m.group(1)
    if m := GITHUB.search(text):
        out["github"] = m.group(1)

    # header
    out["name"] = _name(lines)
    out["role"] = _role(lines, out["name"])

    # about
    bio_idx = _find_section(lines, BIO_HEADERS)
    if bio_idx != -1:
        about = " ".join(lines[bio_idx + 1:_section_end(lines, bio_idx)])
        about = _LEAD_PUNCT.sub("", collapse_ws(about)).strip()
        if len(about) > 20:
            out["summary"] = out["bio"] = about[:500]
    if not out["bio"]:
        for ln in lines[1:15]:
            if len(ln) > 80 and not SECTION_HEADER.match(ln) and "@" not in ln:
                out["summary"] = out["bio"] = ln[:500]
                break

    out["skills"] = _skills(lines, text)
    out["projects"] = _projects(lines)
    return out


# ───────────────────────────────────────── header ──
def _name(lines: List[str]) -> str:
    for ln in lines[:8]:
        cleaned = _NAME_JUNK.sub("", ln).strip()
        words = cleaned.split()
        if (
            3 <= len(cleaned) <= 50
            and not SECTION_HEADER.match(cleaned)
            and not re.search(r"\d", cleaned)
            and "@" not in ln
            and not _URLISH.search(ln)
            and not _CONTACT.search(ln)
            and 2 <= len(words) <= 5
        ):
            return cleaned
    if lines:
        return re.sub(r"[^\w\s]", "", lines[0]).strip()[:50]
    return ""


def _role(lines: List[str], name: str) -> str:
    for ln in lines[:10]:
        if SECTION_HEADER.match(ln) or _CONTACTISH.search(ln):
            continue
        # never reuse the line the name came from
        if name and (ln == name or _NAME_JUNK.sub("", ln).strip() == name):
            continue
        lower = ln.lower()
        if any(kw.lower() in lower for kw in ROLE_KEYWORDS):
            role = _ROLE_BULLET.sub("", ln).strip()
            if 5 < len(role) < 120:
                return role
    return ""


# ───────────────────────────────────────── sections ──
def _find_section(lines: List[str], keywords) -> int:
    for i, ln in enumerate(lines):
        clean = _HDR_PUNCT.sub("", ln).strip().lower()
        for kw in keywords:
            if clean == kw or clean.startswith(kw + " ") or clean.endswith(" " + kw):
                return i
    return -1


def _section_end(lines: List[str], start: int) -> int:
    for i in range(start + 1, len(lines)):
        clean = _HDR_PUNCT.sub("", lines[i]).strip()
        if SECTION_BOUNDARY.match(clean) and len(clean) < 40:
            return i
    return min(start + SECTION_SPAN, len(lines))


# ───────────────────────────────────────── skills ──
def _skills(lines: List[str], text: str) -> List[str]:
    idx = _find_section(lines, SKILL_HEADERS)
    if idx == -1:
        return match_skills(text)

    end = _section_end(lines, idx)
    found = match_skills(" ".join(lines[idx:end]))
    if found:
        return found

    # nothing from the vocabulary: fall back to the section's raw tokens
    raw: List[str] = []
    for tok in _SKILL_SPLIT.split("\n".join(lines[idx + 1:end])):
        tok = _SKILL_JUNK.sub("", tok).strip()
        if 1 < len(tok) < 35 and not tok.isdigit() and tok not in raw:
            raw.append(tok)
    return raw[:MAX_RAW_SKILLS]


# ───────────────────────────────────────── projects ──
def _is_title(line: str) -> bool:
    return (
        len(line) < 80
        and not line.startswith(ACTION_VERBS)
        and not line[:1].isdigit()
        and (
            bool(_TITLE_SEP.search(line))
            or (len(line) < 60 and re.match(r"[A-Z]", line) is not None and ". " not in line)
        )
    )


def _projects(lines: List[str]) -> List[Dict]:
    idx = _find_section(lines, PROJECT_HEADERS)
    if idx == -1:
        return []

    found: List[Dict] = []
    cur: Dict | None = None
    for ln in lines[idx + 1:_section_end(lines, idx)]:
        stripped = _LEAD_BULLET.sub("", ln).strip()
        if not stripped:
            continue

        if _is_title(stripped) and len(stripped) > 3:
            if cur and cur["title"]:
                found.append(cur)
            parts = _TITLE_SPLIT.split(stripped)
            cur = dict(
                PROJECT_SCHEMA,
                title=parts[0].strip()[:100],
                description=" ".join(parts[1:]).strip(),
            )
        elif cur:
            if m := URL.search(stripped):
                cur["link"] = m.group()
            desc = URL.sub("", stripped).strip()
            if len(desc) > 5:
                cur["description"] += (". " if cur["description"] else "") + desc

    if cur and cur["title"]:
        found.append(cur)

    return [
        {"title": p["title"], "description": p["description"][:300], "link": p["link"]}
        for p in found[:MAX_PROJECTS]
    ]

"""
Shared clean-ups: tag stripping, whitespace, social handle normalisation.
"""
from __future__ import annotations
import re
from typing import Any, Dict
from urllib.parse import urlparse

from folio.schema_profile import PROFILE_SCHEMA

_TAGS   = re.compile(r"<[^>]+>")
_WS     = re.compile(r"\s+")
_HANDLE = re.compile(r"[a-zA-Z0-9-]+")

# ───────────────────────────────────────── helpers ──
def strip_tags(markup: str) -> str:
    return _TAGS.sub("", markup or "").strip()

def collapse_ws(s: str) -> str:
    return _WS.sub(" ", s or "").strip()

def _path_parts(value: str, domain: str) -> list[str]:
    if domain in value:
        tail = value[value.rfind(domain) + len(domain):]
        return [p for p in tail.split("/") if p]
    return [p for p in urlparse(value).path.split("/") if p]

def extract_github_username(raw: str | None) -> str:
    """github.com/<user>, a full URL, '@user' or 'user' → 'user' ('' if invalid)."""
    v = (raw or "").strip()
    if not v:
        return ""
    # last occurrence wins: handles URLs pasted twice
    if "github.com" in v or v.startswith("http"):
        parts = _path_parts(v, "github.com")
        return parts[0] if parts else ""
    v = v.lstrip("@")
    return v if _HANDLE.fullmatch(v) else ""

def extract_linkedin_id(raw: str | None) -> str:
    v = (raw or "").strip()
    if not v:
        return ""
    if "linkedin.com" in v or v.startswith("http"):
        parts = _path_parts(v, "linkedin.com")
        if parts and parts[0] in ("in", "pub"):
            return parts[1] if len(parts) > 1 else ""
        return parts[0] if parts else ""
    v = re.sub(r"^in/", "", v).lstrip("@")
    return v if _HANDLE.fullmatch(v) else ""

# ───────────────────────────────────────── context ──
def build_render_context(profile: Dict[str, Any]) -> Dict[str, Any]:
    """Profile record / form payload → data context for any template."""
    ctx: Dict[str, Any] = {k: (list(v) if isinstance(v, list) else v)
                           for k, v in PROFILE_SCHEMA.items()}
    ctx.update({k: v for k, v in (profile or {}).items() if v is not None})

    skills = ctx.get("skills") or ""
    if isinstance(skills, (list, tuple)):
        skills = ", ".join(s.strip() for s in skills if s and s.strip())
    ctx["skills"] = skills

    ctx["projects"] = [
        {
            "title": p.get("title") or "",
            "description": p.get("description") or "",
            "link": p.get("link") or p.get("url") or "",
        }
        for p in (ctx.get("projects") or [])
        if isinstance(p, dict)
    ]

    gh = extract_github_username(ctx.get("github"))
    li = extract_linkedin_id(ctx.get("linkedin"))
    ctx["github"], ctx["linkedin"] = gh, li
    ctx["githubUrl"] = f"https://github.com/{gh}" if gh else ""
    ctx["linkedinUrl"] = f"https://www.linkedin.com/in/{li}" if li else ""
    return ctx

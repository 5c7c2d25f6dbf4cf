"""
Template rendering for built-in and cloned portfolio templates.

Templates are written in the small Handlebars subset the themes and the cloner use
({{x}}, {{{x}}}, {{this.x}}, {{substring x 0 n}}, {{#each}}, {{#if}},
{{#unless}}, {{else}}).
They are translated to Jinja2 and rendered with autoescaping; everything
between placeholders is wrapped in {% raw %} so scraped page text can never
be read as template code.
"""

from __future__ import annotations
import logging
import re
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict

from jinja2 import ChainableUndefined, Environment, Template, TemplateError

from folio import config
from folio.cleaner import build_render_context
from folio.exceptions import TemplateNotFoundError, TemplateRenderError
from folio.schema_profile import SAMPLE_PROFILE
from folio.utils import clone_id

logger = logging.getLogger(__name__)

TEMPLATE_FILE = "index.hbs"
CSS_FILE = "style.css"

_HBS_TOKEN  = re.compile(r"\{\{\{\s*([^{}]+?)\s*\}\}\}|\{\{\s*([^{}]+?)\s*\}\}")
_HBS_PATH   = re.compile(r"(?:this|@index|[A-Za-z_]\w*)(?:\.[A-Za-z_]\w*)*")
_HBS_SPLIT  = re.compile(r"\(\s*split\s+(\S+)\s+([\"'])(.*?)\2\s*\)")
_HBS_SUBSTR = re.compile(r"substring\s+(\S+)\s+(\d+)\s+(\d+)")
_RAW_END    = re.compile(r"\{%[-+]?\s*endraw\s*[-+]?%\}")
_JINJA_WORDS = frozenset({
    "and", "or", "not", "in", "is", "if", "else", "for", "recursive",
    "true", "false", "none", "True", "False", "None",
})


def _split(value: Any, delimiter: str = ",") -> list:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [s.strip() for s in str(value).split(delimiter) if s.strip()]


def _substring(value: Any, start: int, length: int) -> str:
    return str(value or "")[start:start + length]


env = Environment(autoescape=True, undefined=ChainableUndefined, keep_trailing_newline=True)
env.filters["split"] = _split
env.filters["substring"] = _substring


# ───────────────────────────────────────── translation ──
def _path(expr: str) -> str | None:
    if not _HBS_PATH.fullmatch(expr):
        return None
    head, *rest = expr.split(".")
    if head == "@index":
        return None if rest else "loop.index0"
    if head in _JINJA_WORDS:
        return None
    return head + "".join(f'["{part}"]' for part in rest)


def _value(expr: str) -> str | None:
    if m := _HBS_SUBSTR.fullmatch(expr):
        target = _path(m.group(1))
        return f"{target}|substring({m.group(2)}, {m.group(3)})" if target else None
    return _path(expr)


def _iterable(expr: str) -> str | None:
    if m := _HBS_SPLIT.fullmatch(expr):
        target = _path(m.group(1))
        delim = m.group(3).replace("\\", "\\\\").replace('"', '\\"')
        return f'{target}|split("{delim}")' if target else None
    return _path(expr)


def _block(expr: str) -> tuple[str, str, str] | None:
    """Handlebars block token → (action, block kind, Jinja statement).

    None means the token is no block and is left to the value rules.
    """
    if expr == "else":
        return "else", "", "{% else %}"
    if expr == "/each":
        return "close", "each", "{% endfor %}"
    if expr in ("/if", "/unless"):
        return "close", "if", "{% endif %}"
    head, _, arg = expr.partition(" ")
    arg = arg.strip()
    if head == "#each" and (it := _iterable(arg)):
        return "open", "each", f"{{% for this in {it} %}}"
    if head == "#if" and (cond := _path(arg)):
        return "open", "if", f"{{% if {cond} %}}"
    if head == "#unless" and (cond := _path(arg)):
        return "open", "if", f"{{% if not {cond} %}}"
    return None


def _raw(text: str) -> str:
    return "{% raw %}" + text + "{% endraw %}" if text else ""


def _literal(text: str) -> str:
    if "{" not in text and "}" not in text:
        return text
    # an endraw in page text would close the raw block early
    out, last = [], 0
    for m in _RAW_END.finditer(text):
        out.append(_raw(text[last:m.start()]))
        out.append('{{ "{%" }}')
        last = m.start() + 2
    out.append(_raw(text[last:]))
    return "".join(out)


def handlebars_to_jinja(markup: str) -> str:
    """Handlebars subset → Jinja source.

    Block tokens are translated only when they pair up. A stray closer, an
    ``{{else}}`` outside a block and a block left open all stay literal text.
    """
    markup = markup or ""
    found: list[list] = []  # [match, statement or None]
    open_blocks: list[tuple[str, list[int]]] = []
    for m in _HBS_TOKEN.finditer(markup):
        triple, expr = m.group(1), m.group(2)
        if triple is not None:
            target = _value(triple)
            stmt = f"{{{{ {target}|safe }}}}" if target else None
        elif block := _block(expr):
            action, kind, stmt = block
            at = len(found)
            if action == "open":
                open_blocks.append((kind, [at]))
            elif action == "else":
                if open_blocks and len(open_blocks[-1][1]) == 1:
                    open_blocks[-1][1].append(at)
                else:
                    stmt = None
            elif open_blocks and open_blocks[-1][0] == kind:
                open_blocks.pop()
            else:
                stmt = None
        else:
            target = _value(expr)
            stmt = f"{{{{ {target} }}}}" if target else None
        found.append([m, stmt])

    for _, tokens in open_blocks:
        for at in tokens:
            found[at][1] = None

    out, last = [], 0
    for m, stmt in found:
        if stmt is None:
            continue  # unknown helper or unpaired block: stays in the literal run
        out.append(_literal(markup[last:m.start()]))
        out.append(stmt)
        last = m.end()
    out.append(_literal(markup[last:]))
    return "".join(out)


def compile_markup(markup: str) -> Template:
    try:
        return env.from_string(handlebars_to_jinja(markup))
    except TemplateError as exc:
        raise TemplateRenderError(f"Template could not be compiled: {exc}") from exc


def render_markup(markup: str, context: Dict[str, Any]) -> str:
    """Render template text with a profile-shaped data context."""
    try:
        return compile_markup(markup).render(**context)
    except TemplateError as exc:
        raise TemplateRenderError(f"Template could not be rendered: {exc}") from exc


# ───────────────────────────────────────── cache / store ──
@dataclass(frozen=True)
class CompiledTemplate:
    template: Template
    css: str


def is_cloned(name: str) -> bool:
    return name.startswith(config.CLONED_PREFIX)


class TemplateCache:
    """Compiled templates by name.

    Cloned templates are user-generated and may be replaced on disk, so they
    are never stored; ``invalidate`` drops one name or everything.
    """

    def __init__(self):
        self._entries: Dict[str, CompiledTemplate] = {}

    def get(self, name: str) -> CompiledTemplate | None:
        return self._entries.get(name)

    def put(self, name: str, entry: CompiledTemplate) -> bool:
        if is_cloned(name):
            return False
        self._entries[name] = entry
        return True

    def invalidate(self, name: str | None = None) -> None:
        if name is None:
            self._entries.clear()
        else:
            self._entries.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class TemplateStore:
    """Named templates on disk: <templates_dir>/<name>/index.hbs + style.css."""

    def __init__(self, templates_dir: str | Path | None = None, cache: TemplateCache | None = None):
        self.templates_dir = Path(templates_dir or config.TEMPLATES_DIR)
        self.cache = cache if cache is not None else TemplateCache()

    def _dir(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise TemplateNotFoundError(name)
        return self.templates_dir / name

    def exists(self, name: str) -> bool:
        try:
            return (self._dir(name) / TEMPLATE_FILE).is_file()
        except TemplateNotFoundError:
            return False

    def load(self, name: str) -> CompiledTemplate:
        if cached := self.cache.get(name):
            return cached
        tpl_path = self._dir(name) / TEMPLATE_FILE
        if not tpl_path.is_file():
            raise TemplateNotFoundError(name)
        css_path = tpl_path.with_name(CSS_FILE)
        css = css_path.read_text(encoding="utf-8") if css_path.exists() else ""
        entry = CompiledTemplate(compile_markup(tpl_path.read_text(encoding="utf-8")), css)
        self.cache.put(name, entry)
        return entry

    def save_clone(self, skeleton, source_url: str = "") -> str:
        """Persist a cloned skeleton under a fresh ``cloned-`` name."""
        name = config.CLONED_PREFIX + clone_id(skeleton.template_markup, source_url)
        out = self.templates_dir / name
        out.mkdir(parents=True, exist_ok=True)
        (out / TEMPLATE_FILE).write_text(skeleton.template_markup, encoding="utf-8")
        (out / CSS_FILE).write_text(skeleton.css, encoding="utf-8")
        logger.info("cloned template saved as %s", name)
        return name

    def render(self, name: str, data: Dict[str, Any]) -> tuple[str, str]:
        entry = self.load(name)
        try:
            return entry.template.render(**build_render_context(data)), entry.css
        except TemplateError as exc:
            raise TemplateRenderError(f"Template {name} could not be rendered: {exc}") from exc

    def render_to_dir(self, name: str, data: Dict[str, Any], out_dir: str | Path) -> Path:
        html, css = self.render(name, data)
        out_dir = Path(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / "index.html").write_text(html, encoding="utf-8")
        (out_dir / CSS_FILE).write_text(css, encoding="utf-8")
        return out_dir / "index.html"

    def preview(self, name: str) -> str:
        """Sample-data render with the stylesheet inlined into <head>."""
        html, css = self.render(name, SAMPLE_PROFILE)
        return html.replace("</head>", f"<style>{css}</style></head>", 1)

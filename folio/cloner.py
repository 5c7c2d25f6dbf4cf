"""
Scraped portfolio page ➜ reusable template skeleton.

• Strips scripts and the page's own styling, absolutises asset URLs.
• Finds the owner's name, role, bio, skills and projects with class/tag
  heuristics and swaps them for Handlebars-style placeholders.
• Drops sections that only hold the owner's history (experience, blog, …)
  and scrubs their identity from titles, links and the footer.
• Whatever could not be found is injected as a minimal generic block, so the
  skeleton always renders with name/role/bio/skills/projects/email/social.

The stage order matters: later stages look for placeholders left by earlier
ones (e.g. a templated section is never removed as "experience").
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List
from urllib.parse import urljoin

from folio.cleaner import strip_tags
from folio.regions import MatchedRegion, find_region, region_at, splice, top_level_regions
from folio.schema_profile import SECTION_KEYS

logger = logging.getLogger(__name__)


@dataclass
class TemplateSkeleton:
    template_markup: str
    detected_sections: Dict[str, bool]
    css: str = ""


STYLESHEET_LINK = '<link rel="stylesheet" href="style.css">'
SKILLS_EACH     = '{{#each (split skills ",")}}'
PROJECTS_EACH   = "{{#each projects}}"
EACH_END        = "{{/each}}"
CREDIT_LINE     = "<p>Built with ❤️</p>"

# ───────────────────────────────────────── patterns ──
_SCRIPT      = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.I)
_CSS_LINKS   = (
    re.compile(r"""<link[^>]*rel=["']stylesheet["'][^>]*>""", re.I),
    re.compile(r"""<link[^>]*href=["'][^"']*\.css[^"']*["'][^>]*>""", re.I),
)
_STYLE       = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.I)
_ASSET_URL   = re.compile(r"""(src|href)=["'](?!data:|https?:|//|#|\{\{)(/?[^"']+)["']""", re.I)
_HEAD_END    = re.compile(r"</head>", re.I)
_BODY_OPEN   = re.compile(r"<body[^>]*>", re.I)
_BODY_END    = re.compile(r"</body>", re.I)
_H1          = re.compile(r"<h1([^>]*)>([\s\S]*?)</h1>", re.I)
_TITLE       = re.compile(r"<title[^>]*>[\s\S]*?</title>", re.I)
_TOKEN       = re.compile(r"\{\{[^{}]*\}\}")
_NAME_H1     = re.compile(r"<h1[^>]*>\{\{name\}\}</h1>", re.I)
_PARA        = re.compile(r"<p([^>]*)>([\s\S]*?)</p>", re.I)
_LIST_OPEN   = re.compile(r"<(ul|ol)\b[^>]*>", re.I)
_LI          = re.compile(r"<li([^>]*)>([\s\S]*?)</li>", re.I)
_LI_OPEN     = re.compile(r"<li\b[^>]*>", re.I)
_ARTICLE     = re.compile(r"<article\b[^>]*>", re.I)
_CARD_DIV    = re.compile(r"""<div[^>]*class=["'][^"']*(?:card|item|project|featured)[^"']*["'][^>]*>""", re.I)
_PILL        = re.compile(r"<(span|div|a)([^>]*)>([^<]{1,50})</\1>", re.I)
_CARD_HEAD   = re.compile(r"<(h[2-4]|strong)([^>]*)>([\s\S]*?)</\1>", re.I)
_CARD_LINK   = re.compile(r"<a([^>]*)>([\s\S]*?)</a>", re.I)
_CARD_HREF   = re.compile(r"""href=["'][^"'#{][^"']*["']""", re.I)
_TECH_LISTS  = (
    re.compile(r"""<ul[^>]*aria-label=["'][^"']*(?:technolog|tool|tech|used)[^"']*["'][^>]*>[\s\S]*?</ul>""", re.I),
    re.compile(r"""<ul[^>]*class=["'][^"']*(?:tech|tag|stack|tool)[^"']*["'][^>]*>[\s\S]*?</ul>""", re.I),
)
_CARD_IMG    = re.compile(r"<img[^>]*(?:project|card|screenshot|thumb)[^>]*>", re.I)
_FOOTER      = re.compile(r"<footer\b[^>]*>", re.I)
_ATTRIBUTION = re.compile(
    r"<p[^>]*>(?:(?!</p>)[\s\S])*?(?:designed|coded|built|made)"
    r"(?:(?!</p>)[\s\S])*?(?:by|in)(?:(?!</p>)[\s\S])*?</p>",
    re.I,
)
_EMAIL       = re.compile(r"[\w.-]+@[\w.-]+\.[a-zA-Z]{2,}")
_MAILTO      = re.compile(r"mailto:[\w.-]+@[\w.-]+\.[a-zA-Z]{2,}", re.I)
_GITHUB_URL  = re.compile(r"https?://github\.com/[\w-]+", re.I)
_LINKEDIN_URL = re.compile(r"https?://(?:www\.)?linkedin\.com/in/[\w-]+", re.I)
_OTHER_SOCIAL = re.compile(
    r"https?://(?:www\.)?(?:codepen\.io|instagram\.com|twitter\.com|x\.com|dribbble\.com|"
    r"behance\.net|goodreads\.com|medium\.com|dev\.to|facebook\.com|youtube\.com)/[\w.-]+[^\"'\s<]*",
    re.I,
)


def _section_opener(words: str) -> re.Pattern[str]:
    """<section>/<div> whose id or class contains one of ``words``."""
    return re.compile(
        rf"""<(?:section|div)[^>]*(?:id|class)=["'][^"']*(?:{words})[^"']*["'][^>]*>""",
        re.I,
    )


_ABOUT    = _section_opener("about|bio|intro|summary")
_SKILLS   = _section_opener("skill|tech|stack|tool|competenc|expertise")
_PROJECTS = _section_opener("project|work|portfolio|featured")
_PERSONAL = (
    _section_opener("experience|work-history|employment|career"),
    _section_opener("writing|blog|posts|articles|publications"),
    _section_opener("testimonial|reviews|endorsement"),
    _section_opener("education|certification|award"),
)
_PERSONAL_NAV = "experience|work-history|writing|blog|education|testimonial"
_NAV_ITEM = re.compile(
    rf"""<li[^>]*>\s*<a[^>]*href=["']#(?:{_PERSONAL_NAV})[^"']*["'][^>]*>[\s\S]*?</a>\s*</li>""",
    re.I,
)
_NAV_LINK = re.compile(
    rf"""<a[^>]*href=["']#(?:{_PERSONAL_NAV})[^"']*["'][^>]*>[\s\S]*?</a>""",
    re.I,
)

_ROLE_WORDS = re.compile(
    r"developer|engineer|designer|architect|analyst|student|intern|scientist|specialist|"
    r"manager|lead|consultant|programmer|freelancer|full.?stack|front.?end|back.?end|"
    r"software|web|mobile|data|UX|UI",
    re.I,
)
_H2 = re.compile(r"(<h2[^>]*>)([\s\S]*?)(</h2>)", re.I)
_TAGLINE = re.compile(
    r"""(<(?:p|span|div)[^>]*class=["'][^"']*(?:subtitle|tagline|title|role|headline|hero-text|intro-text)"""
    r"""[^"']*["'][^>]*>)([\s\S]*?)(</(?:p|span|div)>)""",
    re.I,
)


# ───────────────────────────────────────── fallback blocks ──
HERO_BLOCK = """
<section style="text-align:center;padding:3rem 1rem;">
  <h1>{{name}}</h1>
  <p style="font-size:1.2em;opacity:0.8;">{{role}}</p>
  <p style="max-width:600px;margin:1rem auto;">{{bio}}</p>
</section>"""

_HERO_PARTS = {
    "name": "  <h1>{{name}}</h1>",
    "role": '  <p style="font-size:1.2em;opacity:0.8;">{{role}}</p>',
    "bio": '  <p style="max-width:600px;margin:1rem auto;">{{bio}}</p>',
}

SKILLS_BLOCK = """
<section style="padding:2rem 1rem;text-align:center;">
  <h2>Skills</h2>
  <div style="display:flex;flex-wrap:wrap;gap:0.5rem;justify-content:center;max-width:600px;margin:0 auto;">
    {{#each (split skills ",")}}
    <span style="background:rgba(100,100,255,0.15);padding:0.3rem 0.8rem;border-radius:20px;font-size:0.9rem;">{{this}}</span>
    {{/each}}
  </div>
</section>"""

PROJECTS_BLOCK = """
<section style="padding:2rem 1rem;max-width:800px;margin:0 auto;">
  <h2 style="text-align:center;">Projects</h2>
  {{#each projects}}
  <div style="background:rgba(255,255,255,0.05);border:1px solid rgba(255,255,255,0.1);border-radius:12px;padding:1.5rem;margin:1rem 0;">
    <h3>{{this.title}}</h3>
    <p>{{this.description}}</p>
    {{#if this.link}}<a href="{{this.link}}" target="_blank">View Project →</a>{{/if}}
  </div>
  {{/each}}
</section>"""

EMAIL_PART = '  {{#if email}}<p>📧 <a href="mailto:{{email}}">{{email}}</a></p>{{/if}}'
SOCIAL_PART = """  <div style="display:flex;gap:1rem;justify-content:center;margin-top:0.5rem;">
    {{#if githubUrl}}<a href="{{githubUrl}}" target="_blank">GitHub</a>{{/if}}
    {{#if linkedinUrl}}<a href="{{linkedinUrl}}" target="_blank">LinkedIn</a>{{/if}}
  </div>"""


# ───────────────────────────────────────── entry point ──
def convert_html_to_template(html: str | None, origin: str = "", css: str = "") -> TemplateSkeleton:
    """Run every stage in order; never raises for string input.

    ``css`` is the page's collected stylesheet text and is passed through
    untouched so the skeleton and its styling travel together.
    """
    tpl = html or ""
    detected = dict.fromkeys(SECTION_KEYS, False)
    person = ""

    def stage(name: str, fn: Callable[[str], str]) -> None:
        nonlocal tpl
        try:
            tpl = fn(tpl)
        except Exception as exc:  # a failed stage leaves its region to the fallbacks
            logger.warning("clone stage %r skipped: %s", name, exc)

    def name_stage(src: str) -> str:
        nonlocal person
        src, person = _template_name(src, detected)
        return src

    stage("scripts", _strip_scripts)
    stage("styles", _strip_styles)
    stage("urls", lambda s: _absolutize_urls(s, origin))
    stage("stylesheet", _inject_stylesheet)
    stage("name", name_stage)
    stage("identity", lambda s: _scrub_identity(s, person))
    stage("role", lambda s: _template_role(s, detected))
    stage("bio", lambda s: _template_bio(s, detected))
    stage("skills", lambda s: _template_skills(s, detected))
    stage("projects", lambda s: _template_projects(s, detected))
    stage("personal", _drop_personal_sections)
    stage("email", lambda s: _template_email(s, detected))
    stage("social", lambda s: _template_social(s, detected))
    stage("footer", _scrub_footer)

    _drop_lost_flags(tpl, detected)
    found = [k for k, v in detected.items() if v]
    logger.debug("detected sections: %s", ", ".join(found) or "none")

    tpl = _inject_fallbacks(tpl, detected)
    return TemplateSkeleton(tpl, detected, css or "")


# ───────────────────────────────────────── cleanup stages ──
def _strip_scripts(tpl: str) -> str:
    return _SCRIPT.sub("", tpl)


def _strip_styles(tpl: str) -> str:
    for pat in _CSS_LINKS:
        tpl = pat.sub("", tpl)
    return _STYLE.sub("", tpl)


def _absolutize_urls(tpl: str, origin: str) -> str:
    def fix(m: re.Match[str]) -> str:
        try:
            return f'{m.group(1)}="{urljoin(origin, m.group(2))}"'
        except ValueError:
            return m.group(0)

    return _ASSET_URL.sub(fix, tpl)


def _inject_stylesheet(tpl: str) -> str:
    if m := _HEAD_END.search(tpl):
        return tpl[:m.start()] + STYLESHEET_LINK + "\n" + tpl[m.start():]
    return STYLESHEET_LINK + "\n" + tpl


# ───────────────────────────────────────── identity ──
def _template_name(tpl: str, detected: Dict[str, bool]) -> tuple[str, str]:
    m = _H1.search(tpl)
    if not m:
        return tpl, ""
    person = strip_tags(m.group(2))
    if 1 < len(person) < 80:
        tpl = tpl[:m.start()] + f"<h1{m.group(1)}>{{{{name}}}}</h1>" + tpl[m.end():]
        detected["name"] = True
    return tpl, person


def _replace_outside_tokens(tpl: str, needle: str, repl: str) -> str:
    out, last = [], 0
    for tok in _TOKEN.finditer(tpl):
        out.append(tpl[last:tok.start()].replace(needle, repl))
        out.append(tok.group(0))
        last = tok.end()
    out.append(tpl[last:].replace(needle, repl))
    return "".join(out)


def _scrub_identity(tpl: str, person: str) -> str:
    # the owner's name in meta tags, alt text, footer … becomes the placeholder
    if len(person) > 2:
        tpl = _replace_outside_tokens(tpl, person, "{{name}}")
    return _TITLE.sub("<title>{{name}} - Portfolio</title>", tpl, count=1)


def _template_role(tpl: str, detected: Dict[str, bool]) -> str:
    candidates = list(_H2.finditer(tpl)) + list(_TAGLINE.finditer(tpl))
    chosen = None
    for m in candidates:
        if _is_templated(m.group(2)):
            continue
        text = strip_tags(m.group(2))
        if _ROLE_WORDS.search(text) and len(text) < 120:
            chosen = m
            break

    # heuristic: no role vocabulary anywhere, so the first short <h2> is taken
    # as the subtitle (this can pick an unrelated heading such as "Hello")
    if chosen is None:
        for m in _H2.finditer(tpl):
            if _is_templated(m.group(2)):
                continue
            if 2 < len(strip_tags(m.group(2))) < 80:
                chosen = m
                break

    if chosen is None:
        return tpl
    detected["role"] = True
    return tpl[:chosen.start()] + chosen.group(1) + "{{role}}" + chosen.group(3) + tpl[chosen.end():]


# ───────────────────────────────────────── sections ──
def _rebuild(tpl: str, sec: MatchedRegion, inner: str) -> str:
    return splice(tpl, sec, sec.open_tag_text + inner + sec.close_tag_text)


def _template_bio(tpl: str, detected: Dict[str, bool]) -> str:
    sec = find_region(tpl, _ABOUT)
    if not sec:
        return tpl
    inner = sec.inner_text
    substantial = [m for m in _PARA.finditer(inner) if len(strip_tags(m.group(2))) > 20]
    if not substantial:
        return tpl

    # first paragraph carries the bio, the rest is the owner's own story
    for m in reversed(substantial[1:]):
        inner = inner[:m.start()] + inner[m.end():]
    first = substantial[0]
    inner = inner[:first.start()] + f"<p{first.group(1)}>{{{{bio}}}}</p>" + inner[first.end():]
    detected["bio"] = True
    return _rebuild(tpl, sec, inner)


def _template_skills(tpl: str, detected: Dict[str, bool]) -> str:
    sec = find_region(tpl, _SKILLS)
    if not sec:
        return tpl
    inner = sec.inner_text

    if lm := _LIST_OPEN.search(inner):
        lst = region_at(inner, lm)
        li = _LI.search(lst.inner_text) if lst else None
        if lst and li:
            loop = (f"{lst.open_tag_text}\n{SKILLS_EACH}\n<li{li.group(1)}>{{{{this}}}}</li>\n"
                    f"{EACH_END}\n{lst.close_tag_text}")
            detected["skills"] = True
            return _rebuild(tpl, sec, splice(inner, lst, loop))

    # pill badges: short inline items, at least three of them
    pills = list(_PILL.finditer(inner))
    if len(pills) < 3:
        return tpl
    tag, attrs = pills[0].group(1), pills[0].group(2)
    loop = f"\n{SKILLS_EACH}\n<{tag}{attrs}>{{{{this}}}}</{tag}>\n{EACH_END}\n"
    for m in reversed(pills[1:]):
        inner = inner[:m.start()] + inner[m.end():]
    first = pills[0]
    inner = inner[:first.start()] + loop + inner[first.end():]
    detected["skills"] = True
    return _rebuild(tpl, sec, inner)


def _substantial(regions: List[MatchedRegion]) -> List[MatchedRegion]:
    return [r for r in regions if len(strip_tags(r.inner_text)) > 20]


def _card_template(card: str) -> str:
    if m := _CARD_HEAD.search(card):
        card = card[:m.start()] + f"<{m.group(1)}{m.group(2)}>{{{{this.title}}}}</{m.group(1)}>" + card[m.end():]
    elif (m := _CARD_LINK.search(card)) and len(strip_tags(m.group(2))) > 3:
        card = card[:m.start()] + f"<a{m.group(1)}>{{{{this.title}}}}</a>" + card[m.end():]

    for m in _PARA.finditer(card):
        if len(strip_tags(m.group(2))) > 10:
            card = card[:m.start()] + f"<p{m.group(1)}>{{{{this.description}}}}</p>" + card[m.end():]
            break

    card = _CARD_HREF.sub('href="{{this.link}}"', card, count=1)
    # per-project tech tags and screenshots have no counterpart in the form data
    for pat in _TECH_LISTS:
        card = pat.sub("", card)
    return _CARD_IMG.sub("", card)


def _template_projects(tpl: str, detected: Dict[str, bool]) -> str:
    sec = find_region(tpl, _PROJECTS)
    if not sec:
        return tpl
    inner = sec.inner_text

    container = None
    cards: List[MatchedRegion] = []
    if lm := _LIST_OPEN.search(inner):
        container = region_at(inner, lm)
        if container:
            cards = _substantial(top_level_regions(container.inner_text, _LI_OPEN))
    if not cards:
        container = None
        cards = _substantial(top_level_regions(inner, _ARTICLE))
    if not cards:
        cards = _substantial(top_level_regions(inner, _CARD_DIV))
    if not cards:
        return tpl

    loop = f"\n{PROJECTS_EACH}\n{_card_template(cards[0].full_text)}\n{EACH_END}\n"
    if container:
        inner = splice(inner, container, container.open_tag_text + loop + container.close_tag_text)
    else:
        inner = inner[:cards[0].start_offset] + loop + inner[cards[-1].end_offset:]
    detected["projects"] = True
    return _rebuild(tpl, sec, inner)


def _is_templated(markup: str) -> bool:
    if _NAME_H1.search(markup):
        return True
    return any(tok != "{{name}}" for tok in _TOKEN.findall(markup))


def _drop_personal_sections(tpl: str) -> str:
    for pat in _PERSONAL:
        pos = 0
        while sec := find_region(tpl, pat, pos):
            if _is_templated(sec.full_text):
                pos = sec.start_offset + len(sec.open_tag_text)
            else:
                tpl = splice(tpl, sec, "")
                pos = sec.start_offset
    tpl = _NAV_ITEM.sub("", tpl)
    return _NAV_LINK.sub("", tpl)


# ───────────────────────────────────────── contact ──
def _template_email(tpl: str, detected: Dict[str, bool]) -> str:
    # mailto targets first; the next match is then the visible address
    tpl, links = _MAILTO.subn("mailto:{{email}}", tpl)
    if m := _EMAIL.search(tpl):
        tpl = tpl[:m.start()] + "{{email}}" + tpl[m.end():]
    if links or m:
        detected["email"] = True
    return tpl


def _template_social(tpl: str, detected: Dict[str, bool]) -> str:
    tpl = _GITHUB_URL.sub("{{githubUrl}}", tpl)
    tpl = _LINKEDIN_URL.sub("{{linkedinUrl}}", tpl)
    if "{{githubUrl}}" in tpl or "{{linkedinUrl}}" in tpl:
        detected["social"] = True
    return _OTHER_SOCIAL.sub("#", tpl)


def _scrub_footer(tpl: str) -> str:
    sec = find_region(tpl, _FOOTER)
    if not sec:
        return tpl

    def credit(m: re.Match[str]) -> str:
        return m.group(0) if _is_templated(m.group(0)) else CREDIT_LINE

    return _rebuild(tpl, sec, _ATTRIBUTION.sub(credit, sec.inner_text))


# ───────────────────────────────────────── fallbacks ──
def _drop_lost_flags(tpl: str, detected: Dict[str, bool]) -> None:
    # a later stage can remove a placeholder an earlier one placed
    present = {
        "name": bool(_NAME_H1.search(tpl)),
        "role": "{{role}}" in tpl,
        "bio": "{{bio}}" in tpl,
        "skills": SKILLS_EACH in tpl,
        "projects": PROJECTS_EACH in tpl,
        "email": "{{email}}" in tpl,
        "social": "{{githubUrl}}" in tpl or "{{linkedinUrl}}" in tpl,
    }
    for key, ok in present.items():
        if detected[key] and not ok:
            logger.debug("placeholder for %s was lost, falling back", key)
            detected[key] = False


def _insert_at_body_start(tpl: str, block: str) -> str:
    if m := _BODY_OPEN.search(tpl):
        return tpl[:m.end()] + block + tpl[m.end():]
    if m := _HEAD_END.search(tpl):
        return tpl[:m.end()] + block + tpl[m.end():]
    return tpl + block


def _insert_at_body_end(tpl: str, block: str) -> str:
    ends = list(_BODY_END.finditer(tpl))
    if ends:
        at = ends[-1].start()
        return tpl[:at] + block + "\n" + tpl[at:]
    return tpl + block + "\n"


def _inject_fallbacks(tpl: str, detected: Dict[str, bool]) -> str:
    hero = ("name", "role", "bio")
    if not any(detected[k] for k in hero):
        tpl = _insert_at_body_start(tpl, HERO_BLOCK)
    elif missing := [k for k in hero if not detected[k]]:
        parts = "\n".join(_HERO_PARTS[k] for k in missing)
        tpl = _insert_at_body_start(tpl, f'\n<section style="text-align:center;padding:2rem 1rem;">\n{parts}\n</section>')
    for k in hero:
        detected[k] = True

    if not detected["skills"]:
        tpl = _insert_at_body_end(tpl, SKILLS_BLOCK)
        detected["skills"] = True

    if not detected["projects"]:
        tpl = _insert_at_body_end(tpl, PROJECTS_BLOCK)
        detected["projects"] = True

    contact = [part for key, part in (("email", EMAIL_PART), ("social", SOCIAL_PART)) if not detected[key]]
    if contact:
        block = '\n<section style="padding:2rem 1rem;text-align:center;">\n' + "\n".join(contact) + "\n</section>"
        tpl = _insert_at_body_end(tpl, block)
        detected["email"] = detected["social"] = True
    return tpl

"""
Depth-aware element extraction over raw markup.

A non-greedy ``<div>(.*?)</div>`` stops at the first inner ``</div>``. Here
every same-name open/close after the opener moves a depth counter, and the
region ends where depth returns to zero. Unbalanced markup yields ``None``
("not found"), never an exception. This is a counter, not a validating parser.
"""

from __future__ import annotations
import re
from dataclasses import dataclass

_TAG_NAME = re.compile(r"^<(\w+)", re.I)


@dataclass(frozen=True)
class MatchedRegion:
    full_text: str
    inner_text: str
    start_offset: int
    end_offset: int
    open_tag_text: str
    close_tag_text: str


def find_region(
    source: str, open_tag: re.Pattern[str] | str, pos: int = 0
) -> MatchedRegion | None:
    """First complete element whose opening tag matches ``open_tag``."""
    if isinstance(open_tag, str):
        open_tag = re.compile(open_tag, re.I)
    m = open_tag.search(source or "", pos)
    return region_at(source, m) if m else None


def region_at(source: str, opener: re.Match[str]) -> MatchedRegion | None:
    """Close the element whose opening tag is the given match."""
    start, open_text = opener.start(), opener.group(0)
    name = _TAG_NAME.match(open_text)
    if not name or open_text.endswith("/>"):
        return None

    # `<div/>` never matches (no space or '>' after the name); `<div />` is skipped
    scan = re.compile(rf"<(/?){re.escape(name.group(1))}(?=\s|>)[^>]*>", re.I)
    depth = 1
    for hit in scan.finditer(source, opener.end()):
        if hit.group(0).endswith("/>"):
            continue
        depth += -1 if hit.group(1) else 1
        if depth == 0:
            return MatchedRegion(
                full_text=source[start:hit.end()],
                inner_text=source[opener.end():hit.start()],
                start_offset=start,
                end_offset=hit.end(),
                open_tag_text=open_text,
                close_tag_text=hit.group(0),
            )
    return None


def top_level_regions(source: str, open_tag: re.Pattern[str]) -> list[MatchedRegion]:
    """Every balanced match of ``open_tag`` not nested inside an earlier one."""
    found: list[MatchedRegion] = []
    for m in open_tag.finditer(source or ""):
        if found and m.start() < found[-1].end_offset:
            continue
        if region := region_at(source, m):
            found.append(region)
    return found


def splice(source: str, region: MatchedRegion, replacement: str) -> str:
    """Swap a region's full text for ``replacement`` at its own offsets."""
    return source[:region.start_offset] + replacement + source[region.end_offset:]

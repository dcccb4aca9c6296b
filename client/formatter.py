"""Turn the model's plain-text answer into display blocks.

The formatter is a table of line rules evaluated top to bottom; the first rule
whose predicate accepts a line builds that line's block. One flag,
``in_bullets``, is threaded through the walk: the sub-heading rule switches it
on, the heading rule switches it off, and the bullet rule only fires while it
is on.

The heading patterns look for literal section names ("Dream Interpretation:",
"Possible Meanings:", "Advice:") which the analysis prompt never asks for;
most answers therefore come out as plain lines.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Tuple, Union

EMPHASIS = re.compile(r"\*")
LINE_BREAK = re.compile(r"[\n\r]")
HEADING = re.compile(r"^(Dream Interpretation:)([^\n\r\u2028\u2029]*)$")
# ASCII-only case folding: "\u017f" (long s) must not fold to "s".
SUBHEADING = re.compile(r"^(Possible Meanings|Advice):", re.IGNORECASE | re.ASCII)
BULLET_SEP = re.compile(r"[,;] ?")
# Stripped from bullet items: space separators, ASCII controls, U+2028/U+2029
# and the BOM. U+0085 is not in the set.
TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


@dataclass(frozen=True)
class Heading:
    text: str
    kind: str = "heading"

@dataclass(frozen=True)
class SubHeading:
    text: str
    kind: str = "subheading"

@dataclass(frozen=True)
class BulletList:
    items: Tuple[str, ...]
    kind: str = "bullets"

@dataclass(frozen=True)
class PlainLine:
    text: str
    kind: str = "line"

DisplayBlock = Union[Heading, SubHeading, BulletList, PlainLine]


class Rule(NamedTuple):
    name: str
    matches: Callable[[str, bool], bool]
    build: Callable[[str], DisplayBlock]
    # New value for in_bullets after this rule fires; None leaves it as is.
    bullets_after: Optional[bool]


def _heading(line: str) -> Heading:
    m = HEADING.match(line)
    return Heading(m.group(1) + m.group(2))

def _bullets(line: str) -> BulletList:
    parts = [p for p in BULLET_SEP.split(line) if p]
    return BulletList(tuple(p.strip(TRIM_CHARS) for p in parts))


RULES: Tuple[Rule, ...] = (
    Rule("heading", lambda line, _: HEADING.match(line) is not None, _heading, False),
    Rule("subheading", lambda line, _: SUBHEADING.match(line) is not None, SubHeading, True),
    Rule("bullets", lambda line, in_bullets: in_bullets and BULLET_SEP.search(line) is not None, _bullets, None),
    Rule("line", lambda line, _: True, PlainLine, None),
)


def split_lines(text: str) -> List[str]:
    """Strip emphasis markers and split into non-empty lines."""
    cleaned = EMPHASIS.sub("", text)
    return [line for line in LINE_BREAK.split(cleaned) if line]


def format_result(text: str) -> List[DisplayBlock]:
    blocks: List[DisplayBlock] = []
    in_bullets = False
    for line in split_lines(text):
        for rule in RULES:
            if rule.matches(line, in_bullets):
                blocks.append(rule.build(line))
                if rule.bullets_after is not None:
                    in_bullets = rule.bullets_after
                break
    return blocks


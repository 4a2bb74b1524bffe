"""Heuristic field extraction from free-form brief text.

Used when the AI-backed parser is unavailable. Each scalar field is resolved
by three passes, each tried only if the previous one found nothing:

1. Explicit label   ("Goal: Increase signups")
2. Heading + value  (short line naming the field, value on the next line)
3. In-context       (first sentence mentioning the keyword)

Matching is case-insensitive substring containment, so a keyword that appears
inside unrelated prose can produce a false positive.

All functions are pure and total: any string is valid input and nothing here
raises. Absent fields come back as None (extract_field) or "" (extract_fields).
"""

import re
from dataclasses import dataclass

from models import ParsedBrief

# Label pass: value after the colon must be longer than this
MIN_LABEL_VALUE_LENGTH = 3
# Heading pass: a heading line is shorter than this, its value line longer
MAX_HEADING_LENGTH = 50
MIN_HEADING_VALUE_LENGTH = 10
# Sentence pass
MIN_CONTEXT_LINE_LENGTH = 20
MIN_SENTENCE_LENGTH = 15

BENEFIT_KEYWORDS = ("benefit", "advantage", "feature", "value", "strength")
BENEFIT_VERBS = ("scale", "unleash", "transform", "enhance", "boost", "improve", "increase")
MAX_BENEFITS = 5
MAX_LIST_SCAN_LINES = 10
MIN_INLINE_BENEFIT_LENGTH = 5
MIN_IMPLICIT_ITEM_LENGTH = 15
MAX_VERB_BENEFITS = 3
VERB_LINE_MIN_LENGTH = 20
VERB_LINE_MAX_LENGTH = 200

_BULLET_RE = re.compile(r"^(?:[-•*◦]\s*|\d+[.)]\s+)")
_HEADING_RE = re.compile(r"^[A-Za-z][\w &/'-]*:")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class FieldSpec:
    """A brief field and the keyword synonyms that identify it, in priority order."""

    name: str
    keywords: tuple[str, ...]


BRIEF_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("goal", ("goal", "objective", "purpose", "aim")),
    FieldSpec("target_audience", ("audience", "target", "demographic", "customer")),
    FieldSpec("brand_personality", ("personality", "tone", "voice", "brand")),
    FieldSpec("product_details", ("product", "service", "offering")),
    FieldSpec("campaign_requirements", ("requirement", "specification", "constraint")),
    FieldSpec("tone_mood", ("tone", "mood", "feeling", "emotion")),
    FieldSpec("call_to_action", ("cta", "call to action", "action", "button")),
    FieldSpec("competitive_context", ("competitor", "competition", "market")),
    FieldSpec("constraints", ("constraint", "limitation", "restriction")),
)


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n")]


def extract_field(text: str, keywords: list[str] | tuple[str, ...]) -> str | None:
    """Return the best value for a field identified by keywords, or None."""
    if not text or not text.strip():
        return None

    lines = _lines(text)
    keywords = [k.lower() for k in keywords if k]
    if not keywords:
        return None

    return (
        _label_pass(lines, keywords)
        or _heading_pass(lines, keywords)
        or _sentence_pass(lines, keywords)
    )


def _label_pass(lines: list[str], keywords: list[str]) -> str | None:
    for line in lines:
        lower = line.lower()
        for keyword in keywords:
            if f"{keyword}:" not in lower:
                continue
            # Rejoin after the first colon so "Time: 9:00" keeps "9:00"
            value = ":".join(line.split(":")[1:]).strip()
            if len(value) > MIN_LABEL_VALUE_LENGTH:
                return value
    return None


def _heading_pass(lines: list[str], keywords: list[str]) -> str | None:
    for line, following in zip(lines, lines[1:]):
        if len(line) >= MAX_HEADING_LENGTH:
            continue
        lower = line.lower()
        if not any(keyword in lower for keyword in keywords):
            continue
        if len(following) > MIN_HEADING_VALUE_LENGTH and ":" not in following:
            return following
    return None


def _sentence_pass(lines: list[str], keywords: list[str]) -> str | None:
    for line in lines:
        if len(line) <= MIN_CONTEXT_LINE_LENGTH:
            continue
        lower = line.lower()
        for keyword in keywords:
            if keyword not in lower:
                continue
            for sentence in _SENTENCE_SPLIT_RE.split(line):
                sentence = sentence.strip()
                if keyword in sentence.lower() and len(sentence) > MIN_SENTENCE_LENGTH:
                    return sentence
    return None


def extract_benefits_list(text: str) -> list[str]:
    """Extract up to five key benefits.

    Looks for a benefit-labelled block first ("Key Benefits:" followed by
    bullets or plain lines). If that yields nothing, falls back to lines that
    use value-proposition verbs, keeping at most three of those.
    """
    if not text or not text.strip():
        return []

    lines = _lines(text)
    items = _labelled_benefits(lines)
    if not items:
        items = _verb_benefits(lines)
    return items[:MAX_BENEFITS]


def _labelled_benefits(lines: list[str]) -> list[str]:
    start = None
    for i, line in enumerate(lines):
        lower = line.lower()
        if ":" in line and any(keyword in lower for keyword in BENEFIT_KEYWORDS):
            start = i
            break
    if start is None:
        return []

    items: list[str] = []
    inline = ":".join(lines[start].split(":")[1:]).strip()
    if len(inline) > MIN_INLINE_BENEFIT_LENGTH:
        items.append(inline)

    for line in lines[start + 1:start + 1 + MAX_LIST_SCAN_LINES]:
        if not line:
            if items:
                break
            continue

        bullet = _BULLET_RE.match(line)
        if bullet:
            item = line[bullet.end():].strip()
            if item:
                items.append(item)
            continue

        if _HEADING_RE.match(line):
            break

        if len(line) > MIN_IMPLICIT_ITEM_LENGTH and ":" not in line:
            items.append(line)

    return items


def _verb_benefits(lines: list[str]) -> list[str]:
    items: list[str] = []
    for line in lines:
        if not VERB_LINE_MIN_LENGTH < len(line) < VERB_LINE_MAX_LENGTH:
            continue
        lower = line.lower()
        if any(verb in lower for verb in BENEFIT_VERBS):
            items.append(line)
            if len(items) >= MAX_VERB_BENEFITS:
                break
    return items


def extract_fields(text: str, specs: tuple[FieldSpec, ...] = BRIEF_FIELDS) -> dict[str, str]:
    """Resolve each FieldSpec against text. Fields with no match map to ""."""
    return {spec.name: extract_field(text, spec.keywords) or "" for spec in specs}


def extract_brief(text: str) -> ParsedBrief:
    """Build a ParsedBrief from raw text without any AI call."""
    return ParsedBrief(
        **extract_fields(text, BRIEF_FIELDS),
        key_benefits=extract_benefits_list(text),
    )

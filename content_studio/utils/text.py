"""
Display helpers for angle descriptions and objectives.
Descriptions are stored as markdown; list views show a plain-text preview.
"""
import re
from typing import NamedTuple

_HEADER_LINE = re.compile(r"###[^#\n]*\n")
_BOLD_BULLET = re.compile(r"- \*\*([^*]+)\*\*")
_BOLD = re.compile(r"\*\*([^*]+)\*\*")
_OBJECTIVE_VERB = re.compile(r"^(Transform|Shift|Reframe|Establish|Position)", re.IGNORECASE)
_OBJECTIVE_FILLERS = (
    re.compile(r"the market perception so that", re.IGNORECASE),
    re.compile(r"the market narrative by positioning", re.IGNORECASE),
)


class TruncatedText(NamedTuple):
    truncated: str
    full_markdown: str
    is_truncated: bool


def markdown_to_plain(description: str) -> str:
    text = _HEADER_LINE.sub("", description)
    text = _BOLD_BULLET.sub(r"• \1", text)
    text = _BOLD.sub(r"\1", text)
    text = text.replace("- ", "• ")
    text = re.sub(r"\n{3,}", " ", text)
    return text.replace("\n", " ").strip()


def clean_and_truncate_description(description: str, max_length: int = 150) -> TruncatedText:
    """
    Plain-text preview of at most max_length characters (plus "...").
    Cuts at the last sentence end when it keeps more than 60% of the budget,
    else at the last space, else hard.
    """
    full = (description or "").strip()
    plain = markdown_to_plain(description or "")
    if len(plain) <= max_length:
        return TruncatedText(plain, full, False)

    head = plain[:max_length]
    last_sentence = head.rfind(".")
    last_space = head.rfind(" ")
    if last_sentence > max_length * 0.6:
        head = head[: last_sentence + 1]
    elif last_space > max_length * 0.6:
        head = head[:last_space] + "..."
    else:
        head = head + "..."
    return TruncatedText(head, full, True)


def format_objective_text(objective: str) -> str:
    """Drop the boilerplate opening verb and filler phrases from an objective."""
    text = _OBJECTIVE_VERB.sub("", objective or "", count=1)
    for filler in _OBJECTIVE_FILLERS:
        text = filler.sub("", text, count=1)
    return text.strip()

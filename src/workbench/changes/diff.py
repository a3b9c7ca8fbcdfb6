"""Diffs between two versions of translated copy.

Text is compared as word tokens, whitespace runs being tokens of their own,
so joining the tokens of a string always gives the string back.
"""

from difflib import SequenceMatcher
import re
from typing import NamedTuple

from workbench.translations.models import ApprovalState

_TOKEN_RE = re.compile(r"\s+|\S+")


class DiffSegment(NamedTuple):
    """A run of text, flagged when it belongs to a changed region."""

    text: str
    changed: bool = False


def _tokenize(text: str | None) -> list[str]:
    return _TOKEN_RE.findall(text or "")


def compact_diff(
    old: str | None, new: str | None
) -> tuple[str | None, str | None]:
    """Smallest differing span between two strings, whitespace-stripped.

    >>> compact_diff("Hello world", "Hello there")
    ('world', 'there')

    A None input gives None on that side; equal inputs give (None, None).
    """
    if old == new:
        return None, None

    old_tokens = _tokenize(old)
    new_tokens = _tokenize(new)
    shortest = min(len(old_tokens), len(new_tokens))

    prefix = 0
    while prefix < shortest and old_tokens[prefix] == new_tokens[prefix]:
        prefix += 1

    suffix = 0
    while (
        suffix < shortest - prefix
        and old_tokens[-1 - suffix] == new_tokens[-1 - suffix]
    ):
        suffix += 1

    old_span = "".join(old_tokens[prefix : len(old_tokens) - suffix]).strip()
    new_span = "".join(new_tokens[prefix : len(new_tokens) - suffix]).strip()
    return (
        None if old is None else old_span,
        None if new is None else new_span,
    )


def _append(segments: list[DiffSegment], text: str, changed: bool) -> None:
    if not text:
        return
    if segments and segments[-1].changed == changed:
        segments[-1] = DiffSegment(segments[-1].text + text, changed)
    else:
        segments.append(DiffSegment(text, changed))


def aligned_diff(
    old: str | None, new: str | None
) -> tuple[list[DiffSegment] | None, list[DiffSegment] | None]:
    """Full old and new text split into aligned segments.

    Segments flagged ``changed`` are the regions to highlight. Joining the
    segment texts of either side (see ``segments_text``) reproduces that
    input exactly. A None input gives None on that side.
    """
    old_tokens = _tokenize(old)
    new_tokens = _tokenize(new)

    old_segments: list[DiffSegment] = []
    new_segments: list[DiffSegment] = []
    matcher = SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        changed = tag != "equal"
        _append(old_segments, "".join(old_tokens[i1:i2]), changed)
        _append(new_segments, "".join(new_tokens[j1:j2]), changed)

    return (
        None if old is None else old_segments,
        None if new is None else new_segments,
    )


def segments_text(segments: list[DiffSegment]) -> str:
    return "".join(segment.text for segment in segments)


def approval_transition_label(
    old: ApprovalState | bool | str | None,
    new: ApprovalState | bool | str | None,
) -> str:
    """Render an approval change, e.g. "Pending to Approved".

    None, True and False read as Pending, Approved and Rejected.
    """
    return f"{ApprovalState.coerce(old).label} to {ApprovalState.coerce(new).label}"

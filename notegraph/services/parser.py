"""Scanning parser that extracts wikilinks, tags, and front-matter from notes."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..models.note import ParsedNote

FRONTMATTER_DELIMITER = "---"
TAG_TRAILING_KEEP = frozenset("-_/")


def parse_note(content: str) -> ParsedNote:
    """
    Parse raw note text into links, tags, and front-matter.

    Never raises: malformed input simply yields fewer facts.
    """
    content = content or ""
    links = extract_wikilinks(content)

    frontmatter, declared_tags = extract_frontmatter(content)
    tags: List[str] = []
    for tag in declared_tags:
        if tag not in tags:
            tags.append(tag)
    for tag in extract_inline_tags(content):
        if tag not in tags:
            tags.append(tag)

    return ParsedNote(links=links, tags=tags, frontmatter=frontmatter)


def extract_wikilinks(content: str) -> List[str]:
    """
    Return ``[[target]]`` / ``[[target|display]]`` targets in document order.

    Unterminated ``[[`` sequences are dropped and duplicates are kept.
    """
    links: List[str] = []
    index = 0
    length = len(content)
    while index < length:
        if not content.startswith("[[", index):
            index += 1
            continue
        close = content.find("]]", index + 2)
        if close == -1:
            break
        inner = content[index + 2 : close]
        target = inner.split("|", 1)[0].strip()
        if target:
            links.append(target)
        index = close + 2
    return links


def _split_frontmatter(content: str) -> Optional[Tuple[str, str]]:
    """Return ``(header, body)`` when a closed front-matter block is present."""
    trimmed = content.lstrip()
    if not trimmed.startswith(FRONTMATTER_DELIMITER):
        return None
    after_start = trimmed[len(FRONTMATTER_DELIMITER) :]
    end = after_start.find("\n" + FRONTMATTER_DELIMITER)
    if end == -1:
        return None
    return after_start[:end], after_start[end + 1 + len(FRONTMATTER_DELIMITER) :]


def _split_tag_list(value: str) -> List[str]:
    tags: List[str] = []
    for raw in value.lstrip("[").rstrip("]").split(","):
        tag = raw.strip().strip('"').strip("'")
        if tag:
            tags.append(tag)
    return tags


def extract_frontmatter(content: str) -> Tuple[Dict[str, str], List[str]]:
    """
    Parse a flat ``key: value`` header delimited by ``---`` lines.

    Returns the front-matter map and the tags declared under ``tags``. Only
    single-line scalars are understood; a header without a closing delimiter
    yields nothing.
    """
    frontmatter: Dict[str, str] = {}
    tags: List[str] = []

    split = _split_frontmatter(content)
    if split is None:
        return frontmatter, tags

    header, _ = split
    for line in header.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if key == "tags":
            tags.extend(_split_tag_list(value))
        else:
            frontmatter[key] = value

    return frontmatter, tags


def _clean_tag(word: str) -> str:
    tag = word.lstrip("#")
    end = len(tag)
    while end and not (tag[end - 1].isalnum() or tag[end - 1] in TAG_TRAILING_KEEP):
        end -= 1
    return tag[:end]


def extract_inline_tags(content: str) -> List[str]:
    """
    Collect ``#tag`` tokens from the note body.

    The front-matter block is skipped when it is properly closed; otherwise the
    whole raw text is scanned.
    """
    split = _split_frontmatter(content)
    body = split[1] if split is not None else content

    tags: List[str] = []
    for word in body.split():
        if not word.startswith("#") or len(word) <= 1:
            continue
        tag = _clean_tag(word)
        if tag and tag not in tags:
            tags.append(tag)
    return tags


__all__ = [
    "parse_note",
    "extract_wikilinks",
    "extract_frontmatter",
    "extract_inline_tags",
]

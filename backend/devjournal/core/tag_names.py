"""Tag Name Normalization — pure helpers shared by schemas and the tag registry.

Invariants:
    - Surrounding whitespace stripped; blank names dropped
    - Duplicates collapsed, first-seen order preserved
    - Case preserved: "React" and "react" are distinct tags (exact-match vocabulary)
"""

from collections.abc import Iterable


def split_tag_string(raw: str) -> list[str]:
    """Split a comma-joined tag string ("js, fp") into raw names."""
    return raw.split(",")


def normalize_tag_names(names: Iterable[str]) -> list[str]:
    """Return stripped, non-blank, de-duplicated tag names in input order."""
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        cleaned = name.strip()
        if not cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        result.append(cleaned)
    return result

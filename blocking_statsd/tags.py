from __future__ import annotations

from typing import Sequence, Tuple, Union

Tags = Union[str, Sequence[str], None]


def normalize_tags(tags: Tags) -> Tuple[str, ...]:
    """A single tag string counts as one tag, not a sequence of characters."""
    if not tags:
        return ()
    if isinstance(tags, str):
        return (tags,)
    return tuple(tags)


def tag_suffix(constant_tags: Tags, tags: Tags) -> str:
    """Build the dogstatsd tag suffix: |#tag1,tag2,...

    Constant tags come first, then call tags, each in the order given.
    Tags are not escaped: a tag containing ',' or '|' corrupts the line.
    """

    merged = normalize_tags(constant_tags) + normalize_tags(tags)
    if not merged:
        return ""
    return "|#" + ",".join(merged)

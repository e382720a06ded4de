"""Hierarchical property keys such as ``border.color``."""

from __future__ import annotations

from dataclasses import dataclass

SEPARATOR = "."


@dataclass(frozen=True)
class PropertyKey:
    """A path of string segments identifying a property.

    Keys compare and hash by their full path. ``len(key)`` is the depth of
    the key, the number of segments.
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("PropertyKey needs at least one segment")
        for segment in self.segments:
            if not segment or SEPARATOR in segment:
                raise ValueError(f"Invalid key segment: {segment!r}")

    @classmethod
    def parse(cls, path: str) -> PropertyKey:
        """Build a key from a dotted path like ``border.color``."""
        return cls(tuple(path.split(SEPARATOR)))

    def append(self, segment: str) -> PropertyKey:
        """Return a new key with *segment* added at the end."""
        return PropertyKey(self.segments + (segment,))

    @property
    def last(self) -> str:
        return self.segments[-1]

    @property
    def parent(self) -> PropertyKey | None:
        if len(self.segments) == 1:
            return None
        return PropertyKey(self.segments[:-1])

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments)


def as_key(key: str | PropertyKey) -> PropertyKey:
    """Return *key* as a PropertyKey, parsing dotted strings."""
    if isinstance(key, PropertyKey):
        return key
    return PropertyKey.parse(key)

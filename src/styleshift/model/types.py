"""Property types: value conversion and the interpolation contract.

Every property is read with a :class:`PropertyType`. The type turns raw rule
values (usually strings from a rule sheet) into Python values and knows how
to blend two values of its kind. Types that cannot be interpolated return
``None`` from :meth:`PropertyType.blend`, strategies then fall back to a
jump from source to target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from styleshift.errors import UnknownTypeError


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not 0 <= channel <= 255:
                raise ValueError(f"Colour channel out of range: {channel}")

    @classmethod
    def parse(cls, raw: str) -> Color:
        """Parse ``#rrggbb``, ``#rrggbbaa`` or a named colour."""
        text = raw.strip().lower()
        if text in NAMED_COLORS:
            return NAMED_COLORS[text]
        if text.startswith("#") and len(text) in (7, 9):
            try:
                channels = [int(text[i : i + 2], 16) for i in range(1, len(text), 2)]
            except ValueError:
                raise ValueError(f"Invalid colour: {raw!r}") from None
            return cls(*channels)
        raise ValueError(f"Invalid colour: {raw!r}")

    def hex(self) -> str:
        text = f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
        if self.alpha != 255:
            text += f"{self.alpha:02x}"
        return text

    def __str__(self) -> str:
        return self.hex()


NAMED_COLORS: dict[str, Color] = {
    "black": Color(0, 0, 0),
    "white": Color(255, 255, 255),
    "red": Color(255, 0, 0),
    "green": Color(0, 128, 0),
    "lime": Color(0, 255, 0),
    "blue": Color(0, 0, 255),
    "yellow": Color(255, 255, 0),
    "gray": Color(128, 128, 128),
    "transparent": Color(0, 0, 0, 0),
}


def _lerp(source: float, target: float, progress: float) -> float:
    return source + (target - source) * progress


@dataclass(frozen=True)
class PropertyType:
    """Base type: converts raw values and blends them (not interpolatable)."""

    name: str

    def coerce(self, raw: Any) -> Any:
        """Convert a raw rule value into a value of this type."""
        return raw

    def blend(self, source: Any, target: Any, progress: float) -> Any | None:
        """Blend *source* towards *target*; ``None`` if not interpolatable."""
        return None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class StringType(PropertyType):
    name: str = "string"

    def coerce(self, raw: Any) -> Any:
        if raw is None:
            return None
        return str(raw)


@dataclass(frozen=True)
class BooleanType(PropertyType):
    name: str = "boolean"

    def coerce(self, raw: Any) -> Any:
        if raw is None or isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            return raw.strip().lower() in ("true", "1", "yes")
        return bool(raw)


@dataclass(frozen=True)
class IntegerType(PropertyType):
    name: str = "integer"

    def coerce(self, raw: Any) -> Any:
        if raw is None:
            return None
        if isinstance(raw, str):
            return int(float(raw.strip()))
        return int(raw)

    def blend(self, source: Any, target: Any, progress: float) -> Any | None:
        if source is None or target is None:
            return None
        return round(_lerp(source, target, progress))


@dataclass(frozen=True)
class FloatType(PropertyType):
    name: str = "float"

    def coerce(self, raw: Any) -> Any:
        if raw is None:
            return None
        if isinstance(raw, str):
            return float(raw.strip())
        return float(raw)

    def blend(self, source: Any, target: Any, progress: float) -> Any | None:
        if source is None or target is None:
            return None
        return _lerp(source, target, progress)


@dataclass(frozen=True)
class ColorType(PropertyType):
    name: str = "color"

    def coerce(self, raw: Any) -> Any:
        if raw is None or isinstance(raw, Color):
            return raw
        return Color.parse(str(raw))

    def blend(self, source: Any, target: Any, progress: float) -> Any | None:
        if source is None or target is None:
            return None
        return Color(
            round(_lerp(source.red, target.red, progress)),
            round(_lerp(source.green, target.green, progress)),
            round(_lerp(source.blue, target.blue, progress)),
            round(_lerp(source.alpha, target.alpha, progress)),
        )


STRING = StringType()
BOOLEAN = BooleanType()
INTEGER = IntegerType()
FLOAT = FloatType()
COLOR = ColorType()

_TYPES: dict[str, PropertyType] = {t.name: t for t in (STRING, BOOLEAN, INTEGER, FLOAT, COLOR)}


def get_type(name: str) -> PropertyType:
    """Look up a built-in or registered type by name."""
    try:
        return _TYPES[name]
    except KeyError:
        raise UnknownTypeError(name) from None


def register_type(property_type: PropertyType) -> None:
    """Make *property_type* available to :func:`get_type` and rule sheets."""
    _TYPES[property_type.name] = property_type


def is_type_name(name: str) -> bool:
    return name in _TYPES

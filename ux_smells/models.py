"""Data models for UX smell detection.

This module defines the host-agnostic element representation analyzed by
rules, the tagged values carried by evidence and configuration, and the
issue records handed to the presentation layer.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar


class IssueCategory(Enum):
    """Closed set of issue categories a rule can belong to."""

    ACCESSIBILITY = "accessibility"
    READABILITY = "readability"
    LAYOUT = "layout"
    CONSISTENCY = "consistency"
    NAVIGATION = "navigation"
    FEEDBACK = "feedback"
    EFFICIENCY = "efficiency"


class SeverityLevel(Enum):
    """Severity levels for rules and evidence."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __lt__(self, other: "SeverityLevel") -> bool:
        order = [SeverityLevel.LOW, SeverityLevel.MEDIUM, SeverityLevel.HIGH]
        return order.index(self) < order.index(other)

    def __le__(self, other: "SeverityLevel") -> bool:
        return self == other or self < other

    def __gt__(self, other: "SeverityLevel") -> bool:
        return not self <= other

    def __ge__(self, other: "SeverityLevel") -> bool:
        return not self < other


class EvidenceKind(Enum):
    """Kinds of observations backing a detection."""

    MEASUREMENT = "measurement"  # A measured property (size, ratio, count)
    VIOLATION = "violation"  # A guideline broken outright
    PATTERN = "pattern"  # A pattern across several elements
    COMPARISON = "comparison"  # A comparison against other elements


# ---------------------------------------------------------------------------
# Tagged values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NumberValue:
    """Numeric payload."""

    value: float
    kind: ClassVar[str] = "number"

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class StringValue:
    """Text payload."""

    value: str
    kind: ClassVar[str] = "string"

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class BooleanValue:
    """Boolean payload."""

    value: bool
    kind: ClassVar[str] = "boolean"

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class RecordValue:
    """Structured payload: a mapping or a sequence of plain values."""

    value: dict[str, Any] | list[Any]
    kind: ClassVar[str] = "record"

    def to_python(self) -> dict[str, Any] | list[Any]:
        return self.value


Value = NumberValue | StringValue | BooleanValue | RecordValue


def to_value(raw: Any) -> Value | None:
    """Coerce a plain Python value into its tagged variant.

    Args:
        raw: None, an existing tagged value, a bool, a number, a string,
            a mapping or a list/tuple.

    Returns:
        The tagged value, or None when ``raw`` is None.

    Raises:
        TypeError: If the value has no tagged representation.
    """
    if raw is None:
        return None
    if isinstance(raw, NumberValue | StringValue | BooleanValue | RecordValue):
        return raw
    # bool first: bool is a subclass of int
    if isinstance(raw, bool):
        return BooleanValue(raw)
    if isinstance(raw, int | float):
        return NumberValue(raw)
    if isinstance(raw, str):
        return StringValue(raw)
    if isinstance(raw, Mapping):
        return RecordValue(dict(raw))
    if isinstance(raw, list | tuple):
        return RecordValue(list(raw))
    raise TypeError(f"Unsupported value type: {type(raw).__name__}")


def from_value(value: Value | None) -> Any:
    """Return the plain payload of a tagged value (None passes through)."""
    return None if value is None else value.to_python()


# ---------------------------------------------------------------------------
# Element model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Color:
    """RGBA color with channels in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def to_rgb255(self) -> tuple[int, int, int]:
        """Return the color as 0-255 integer channels."""
        return (round(self.r * 255), round(self.g * 255), round(self.b * 255))

    def to_dict(self) -> dict[str, Any]:
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Color":
        return cls(
            r=float(data.get("r", 0.0)),
            g=float(data.get("g", 0.0)),
            b=float(data.get("b", 0.0)),
            a=float(data.get("a", 1.0)),
        )


@dataclass(frozen=True)
class Paint:
    """A fill or stroke paint."""

    type: str
    color: Color | None = None
    opacity: float = 1.0
    visible: bool = True

    @property
    def is_solid(self) -> bool:
        return self.type == "SOLID" and self.color is not None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.type,
            "opacity": self.opacity,
            "visible": self.visible,
        }
        if self.color is not None:
            result["color"] = self.color.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Paint":
        color = data.get("color")
        return cls(
            type=data.get("type", "SOLID"),
            color=Color.from_dict(color) if isinstance(color, dict) else None,
            opacity=float(data.get("opacity", 1.0)),
            visible=bool(data.get("visible", True)),
        )


@dataclass(frozen=True)
class Effect:
    """A visual effect such as a drop shadow or blur."""

    type: str
    visible: bool = True
    radius: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "visible": self.visible, "radius": self.radius}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Effect":
        return cls(
            type=data.get("type", "DROP_SHADOW"),
            visible=bool(data.get("visible", True)),
            radius=data.get("radius"),
        )


@dataclass(frozen=True)
class FontName:
    """Font family and style."""

    family: str
    style: str = "Regular"

    def to_dict(self) -> dict[str, Any]:
        return {"family": self.family, "style": self.style}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FontName":
        return cls(family=data["family"], style=data.get("style", "Regular"))


@dataclass(frozen=True)
class LineHeight:
    """Line height as the host expresses it.

    ``unit`` is PIXELS, PERCENT or AUTO; AUTO carries no value.
    """

    value: float | None
    unit: str = "PIXELS"

    def in_pixels(self, font_size: float) -> float | None:
        """Resolve the line height to pixels for a given font size."""
        if self.value is None or self.unit == "AUTO":
            return None
        if self.unit == "PERCENT":
            return self.value / 100 * font_size
        return self.value

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "unit": self.unit}

    @classmethod
    def from_raw(cls, raw: Any) -> "LineHeight | None":
        """Build from a bare number or a ``{"value", "unit"}`` mapping."""
        if raw is None:
            return None
        if isinstance(raw, int | float) and not isinstance(raw, bool):
            return cls(value=float(raw))
        if isinstance(raw, dict):
            value = raw.get("value")
            return cls(
                value=float(value) if value is not None else None,
                unit=raw.get("unit", "PIXELS"),
            )
        return None


@dataclass(frozen=True)
class Element:
    """Normalized, host-agnostic design element.

    Elements are immutable for the duration of an analysis and owned by
    the caller. Nested host structure is flattened before it reaches
    this model (see ``ux_smells.document``).
    """

    id: str
    name: str
    type: str
    visible: bool = True
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    characters: str | None = None
    font_size: float | None = None
    font_name: FontName | None = None
    line_height: LineHeight | None = None
    fills: tuple[Paint, ...] = ()
    strokes: tuple[Paint, ...] = ()
    stroke_weight: float | None = None
    corner_radius: float | None = None
    opacity: float | None = None
    effects: tuple[Effect, ...] = ()

    @property
    def has_position(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def has_size(self) -> bool:
        return self.width is not None and self.height is not None

    @property
    def has_geometry(self) -> bool:
        return self.has_position and self.has_size

    @property
    def label(self) -> str:
        """Name of the element, falling back to its text content."""
        return self.name or self.characters or ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host-style (camelCase) dictionary."""
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "visible": self.visible,
        }
        optional = {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "characters": self.characters,
            "fontSize": self.font_size,
            "strokeWeight": self.stroke_weight,
            "cornerRadius": self.corner_radius,
            "opacity": self.opacity,
        }
        result.update({k: v for k, v in optional.items() if v is not None})
        if self.font_name is not None:
            result["fontName"] = self.font_name.to_dict()
        if self.line_height is not None:
            result["lineHeight"] = self.line_height.to_dict()
        if self.fills:
            result["fills"] = [p.to_dict() for p in self.fills]
        if self.strokes:
            result["strokes"] = [p.to_dict() for p in self.strokes]
        if self.effects:
            result["effects"] = [e.to_dict() for e in self.effects]
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Element":
        """Create from a host-style dictionary.

        Geometry is read from ``x``/``y``/``width``/``height`` or, failing
        that, from an ``absoluteBoundingBox`` mapping.
        """
        box = data.get("absoluteBoundingBox") or {}

        def geometry(key: str) -> float | None:
            value = data.get(key, box.get(key))
            return float(value) if value is not None else None

        font_name = data.get("fontName")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            type=data.get("type", "UNKNOWN"),
            visible=bool(data.get("visible", True)),
            x=geometry("x"),
            y=geometry("y"),
            width=geometry("width"),
            height=geometry("height"),
            characters=data.get("characters"),
            font_size=data.get("fontSize"),
            font_name=FontName.from_dict(font_name) if isinstance(font_name, dict) else None,
            line_height=LineHeight.from_raw(data.get("lineHeight")),
            fills=tuple(Paint.from_dict(p) for p in data.get("fills") or []),
            strokes=tuple(Paint.from_dict(p) for p in data.get("strokes") or []),
            stroke_weight=data.get("strokeWeight"),
            corner_radius=data.get("cornerRadius"),
            opacity=data.get("opacity"),
            effects=tuple(Effect.from_dict(e) for e in data.get("effects") or []),
        )


# ---------------------------------------------------------------------------
# Evidence and issues
# ---------------------------------------------------------------------------


@dataclass
class Evidence:
    """A typed observation backing a detection.

    ``value`` and ``expected`` accept plain Python data and are stored as
    tagged values. Kind and severity accept enum members or their string
    values.
    """

    kind: EvidenceKind
    description: str
    value: Value | None = None
    expected: Value | None = None
    severity: SeverityLevel = SeverityLevel.MEDIUM

    def __post_init__(self) -> None:
        self.kind = EvidenceKind(self.kind)
        self.severity = SeverityLevel(self.severity)
        self.value = to_value(self.value)
        self.expected = to_value(self.expected)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "type": self.kind.value,
            "description": self.description,
            "severity": self.severity.value,
        }
        if self.value is not None:
            result["value"] = self.value.to_python()
            result["value_kind"] = self.value.kind
        if self.expected is not None:
            result["expected"] = self.expected.to_python()
            result["expected_kind"] = self.expected.kind
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Evidence":
        """Create from dictionary."""
        return cls(
            kind=EvidenceKind(data["type"]),
            description=data["description"],
            value=data.get("value"),
            expected=data.get("expected"),
            severity=SeverityLevel(data.get("severity", "medium")),
        )


@dataclass(frozen=True)
class Position:
    x: int
    y: int


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class ElementInfo:
    """Display snapshot of the element an issue points at."""

    name: str
    type: str
    position: Position | None = None
    size: Size | None = None
    text_content: str | None = None
    hierarchy: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "position": (
                {"x": self.position.x, "y": self.position.y} if self.position else None
            ),
            "size": (
                {"width": self.size.width, "height": self.size.height}
                if self.size
                else None
            ),
            "text_content": self.text_content,
            "hierarchy": list(self.hierarchy),
        }


@dataclass(frozen=True)
class IssueDetails:
    """Convenience fields derived from the detection evidence."""

    expected_value: Value | None = None
    actual_value: Value | None = None
    auto_fixable: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "expected_value": from_value(self.expected_value),
            "actual_value": from_value(self.actual_value),
            "auto_fixable": self.auto_fixable,
        }


@dataclass(frozen=True)
class Issue:
    """User-facing record of a rule detecting a problem on an element.

    Issues are value objects owned by the batch result that produced them.
    Severity and category always come from the originating rule.
    """

    id: str
    element_id: str
    category: IssueCategory
    severity: SeverityLevel
    description: str
    rule_id: str
    element_info: ElementInfo
    details: IssueDetails
    evidence: tuple[Evidence, ...] = ()
    confidence: float = 0.0
    suggestions: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "element_id": self.element_id,
            "category": self.category.value,
            "severity": self.severity.value,
            "description": self.description,
            "rule_id": self.rule_id,
            "element_info": self.element_info.to_dict(),
            "details": self.details.to_dict(),
            "evidence": [e.to_dict() for e in self.evidence],
            "confidence": self.confidence,
            "suggestions": list(self.suggestions),
        }

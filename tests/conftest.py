"""
Shared fixtures for the UX smells test suite.

Provides test fixtures for:
- Element construction
- Simple, failing and conditional rules
- Registries with and without the built-in rules
- Sample design documents on disk
"""

import json
from pathlib import Path

import pytest

from ux_smells.models import (
    Color,
    Element,
    Evidence,
    EvidenceKind,
    IssueCategory,
    Paint,
    SeverityLevel,
)
from ux_smells.rules.base import DetectionResult, Rule, RuleContext, create_basic_rule
from ux_smells.rules.registry import RuleRegistry, create_rule_registry


def make_element(id: str = "el-1", name: str = "Element", type: str = "RECTANGLE", **kwargs) -> Element:
    """Build an Element with sensible defaults."""
    return Element(id=id, name=name, type=type, **kwargs)


def solid(r: float, g: float, b: float) -> Paint:
    return Paint(type="SOLID", color=Color(r, g, b))


def always_detect(element: Element, context: RuleContext) -> DetectionResult:
    return DetectionResult(
        detected=True,
        confidence=0.75,
        evidence=[
            Evidence(
                kind=EvidenceKind.MEASUREMENT,
                description="Always detected",
                value=1,
                expected=2,
                severity=SeverityLevel.LOW,
            )
        ],
        suggestions=["Do something"],
    )


def never_detect(element: Element, context: RuleContext) -> DetectionResult:
    return DetectionResult.not_detected()


def make_rule(
    id: str = "mock-rule",
    detection_function=always_detect,
    category: IssueCategory = IssueCategory.LAYOUT,
    severity: SeverityLevel = SeverityLevel.HIGH,
    fix_function=None,
) -> Rule:
    """Build a basic rule around a detection function."""
    return create_basic_rule(
        id,
        f"Rule {id}",
        f"Description of {id}",
        category,
        severity,
        detection_function,
        fix_function,
    )


class FailingOnElement:
    """Detection function that raises for one element id only."""

    def __init__(self, element_id: str):
        self.element_id = element_id

    def __call__(self, element: Element, context: RuleContext) -> DetectionResult:
        if element.id == self.element_id:
            raise RuntimeError(f"boom on {element.id}")
        return DetectionResult.not_detected()


class RecordingDetector:
    """Detection function that records every context it receives."""

    def __init__(self):
        self.calls: list[tuple[Element, RuleContext]] = []

    def __call__(self, element: Element, context: RuleContext) -> DetectionResult:
        if element.id != "test":
            self.calls.append((element, context))
        return DetectionResult.not_detected()


# ---------------------------------------------------------------------------
# Element fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def elements() -> list[Element]:
    """Three positioned rectangles, the first two overlapping."""
    return [
        make_element("a", "Card A", x=0, y=0, width=100, height=100),
        make_element("b", "Card B", x=50, y=50, width=100, height=100),
        make_element("c", "Card C", x=400, y=400, width=100, height=100),
    ]


@pytest.fixture()
def text_element() -> Element:
    return make_element(
        "text-1",
        "Body copy",
        "TEXT",
        x=0,
        y=0,
        width=300,
        height=40,
        characters="Welcome to the dashboard",
        font_size=16,
        fills=(solid(0.1, 0.1, 0.1),),
    )


# ---------------------------------------------------------------------------
# Registry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def registry() -> RuleRegistry:
    """Empty registry."""
    return RuleRegistry()


@pytest.fixture()
def default_registry() -> RuleRegistry:
    """Registry with every built-in rule registered and enabled."""
    return create_rule_registry(register_defaults=True)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_document() -> dict:
    """Host-style document with a page, a frame and nested nodes."""
    return {
        "document": {
            "id": "0:0",
            "type": "DOCUMENT",
            "children": [
                {
                    "id": "0:1",
                    "name": "Page 1",
                    "type": "PAGE",
                    "children": [
                        {
                            "id": "1:1",
                            "name": "Login form",
                            "type": "FRAME",
                            "x": 0,
                            "y": 0,
                            "width": 400,
                            "height": 600,
                            "children": [
                                {
                                    "id": "1:2",
                                    "name": "Title",
                                    "type": "TEXT",
                                    "x": 20,
                                    "y": 20,
                                    "width": 200,
                                    "height": 30,
                                    "characters": "Sign in",
                                    "fontSize": 24,
                                    "fontName": "mixed",
                                },
                                {
                                    "id": "1:3",
                                    "name": "Submit button",
                                    "type": "INSTANCE",
                                    "x": 20,
                                    "y": 500,
                                    "width": 120,
                                    "height": 30,
                                },
                            ],
                        }
                    ],
                }
            ],
        }
    }


@pytest.fixture()
def sample_document_file(tmp_path: Path, sample_document: dict) -> Path:
    path = tmp_path / "design.json"
    path.write_text(json.dumps(sample_document))
    return path

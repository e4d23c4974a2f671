"""Element classification and geometry helpers shared by built-in rules.

Classification is heuristic: it looks at layer names and rough
proportions, the way designers usually name and draw these components.
"""

import math
import re

from ...models import Element

INTERACTIVE_NAMES = ("button", "btn", "link", "clickable", "tab", "menu")
INTERACTIVE_TYPES = ("INSTANCE", "COMPONENT")
BUTTON_KEYWORDS = ("button", "btn", "cta", "submit", "action")
INPUT_KEYWORDS = ("input", "field", "textfield", "text-field", "entrada", "campo")
INPUT_TYPES = ("COMPONENT", "INSTANCE", "RECTANGLE", "FRAME")
FORM_KEYWORDS = ("form", "formulario", "login", "register", "signup", "contact")
DATEPICKER_KEYWORDS = ("date", "calendar", "datepicker", "fecha", "calendario")
DROPDOWN_KEYWORDS = ("dropdown", "select", "picker", "desplegable", "combo")
CHECKBOX_RADIO_KEYWORDS = ("checkbox", "radio", "check", "option", "selection")
SUBMIT_KEYWORDS = ("submit", "send", "save", "create", "update", "delete", "confirm")

# Distance under which two elements count as "near"
NEAR_DISTANCE = 100


def clamp_confidence(value: float) -> float:
    """Clamp a confidence score into [0, 1]."""
    return max(0.0, min(1.0, value))


def lower_name(element: Element) -> str:
    return (element.name or "").lower()


def lower_label(element: Element) -> str:
    return (element.name or element.characters or "").lower()


def name_contains(element: Element, keywords: tuple[str, ...]) -> bool:
    name = lower_name(element)
    return any(keyword in name for keyword in keywords)


def any_name_contains(elements: list[Element], keywords: tuple[str, ...]) -> bool:
    return any(name_contains(el, keywords) for el in elements)


def is_interactive_element(element: Element) -> bool:
    return element.type in INTERACTIVE_TYPES or name_contains(
        element, INTERACTIVE_NAMES
    )


def is_button_element(element: Element) -> bool:
    return name_contains(element, BUTTON_KEYWORDS) or element.type in (
        "COMPONENT",
        "INSTANCE",
    )


def is_input_element(element: Element) -> bool:
    """Named like an input, or a wide box of typical input height."""
    if name_contains(element, INPUT_KEYWORDS):
        return True
    if element.type not in INPUT_TYPES or not element.has_size:
        return False
    return element.width > element.height * 2 and 32 <= element.height <= 60


def is_form_element(element: Element) -> bool:
    return name_contains(element, FORM_KEYWORDS) or is_input_element(element)


def is_datepicker_element(element: Element) -> bool:
    return name_contains(element, DATEPICKER_KEYWORDS)


def is_dropdown_element(element: Element) -> bool:
    return name_contains(element, DROPDOWN_KEYWORDS)


def is_form_field_element(element: Element) -> bool:
    return (
        is_input_element(element)
        or is_dropdown_element(element)
        or is_datepicker_element(element)
    )


def is_checkbox_or_radio_element(element: Element) -> bool:
    """Named like a checkbox/radio, or a small roughly square shape."""
    if name_contains(element, CHECKBOX_RADIO_KEYWORDS):
        return True
    if not element.has_size:
        return False
    return abs(element.width - element.height) < 5 and 12 <= element.width <= 32


def is_submit_button(element: Element) -> bool:
    label = lower_label(element)
    return any(keyword in label for keyword in SUBMIT_KEYWORDS)


def is_near_element(first: Element, second: Element) -> bool:
    """Origins of both elements lie within NEAR_DISTANCE of each other."""
    if not (first.has_position and second.has_position):
        return False
    distance = math.hypot(first.x - second.x, first.y - second.y)
    return distance < NEAR_DISTANCE


def is_label_well_positioned(input_element: Element, label: Element) -> bool:
    """Label sits above (x-aligned) or to the left (y-aligned) of the input."""
    if not (input_element.has_position and label.has_position):
        return False
    is_above = label.y < input_element.y and abs(label.x - input_element.x) < 50
    is_left = label.x < input_element.x and abs(label.y - input_element.y) < 20
    return is_above or is_left


def is_element_inside(child: Element, parent: Element) -> bool:
    if not (child.has_geometry and parent.has_geometry):
        return False
    return (
        child.x >= parent.x
        and child.y >= parent.y
        and child.x + child.width <= parent.x + parent.width
        and child.y + child.height <= parent.y + parent.height
    )


def rectangles_overlap(first: Element, second: Element) -> bool:
    if not (first.has_geometry and second.has_geometry):
        return False
    return not (
        first.x + first.width <= second.x
        or second.x + second.width <= first.x
        or first.y + first.height <= second.y
        or second.y + second.height <= first.y
    )


DATE_PATTERN = re.compile(r"\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}")


def element_refs(elements: list[Element]) -> list[dict[str, str]]:
    """Compact id/name references for evidence payloads."""
    return [{"id": el.id, "name": el.name} for el in elements]

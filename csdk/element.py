"""Elements and their type advantages."""

from __future__ import annotations
from dataclasses import dataclass, field
from functools import reduce


@dataclass(frozen=True)
class Element:
    id: str
    # Element ids this element is weak over
    weak_over: list[str] = field(default_factory=list)
    # Element ids this element is strong over
    strong_over: list[str] = field(default_factory=list)
    # Element ids this element is useless over
    useless_over: list[str] = field(default_factory=list)


def get_element_strength_factor_by_defensive_id(offensive_element: Element, defensive_id: str) -> float:
    if defensive_id in offensive_element.useless_over:
        return 0
    if defensive_id in offensive_element.weak_over:
        return 0.5
    if defensive_id in offensive_element.strong_over:
        return 2
    return 1


def compute_elements_strength_factor_by_defensive_ids(
    offensive_elements: list[Element],
    defensive_element_ids: list[str],
) -> float:
    """Product of every offensive/defensive pair factor."""
    factors = [
        get_element_strength_factor_by_defensive_id(element, defensive_id)
        for element in offensive_elements
        for defensive_id in defensive_element_ids
    ]
    return reduce(lambda factor, value: factor * value, factors, 1)


def compute_elements_strength_factor(
    offensive_elements: list[Element],
    defensive_elements: list[Element],
) -> float:
    defensive_element_ids = [element.id for element in defensive_elements]
    return compute_elements_strength_factor_by_defensive_ids(offensive_elements, defensive_element_ids)

"""
Items - Definition and usage handlers.

Game code defines, per item type, whether an item can be used in the
current scene state and what using it does:

    items = ItemRegistry()
    items.on_can_item_be_used("heal", lambda item, scene_state: True)
    items.on_use_item("heal", lambda item, scene_state: {
        "item_action": ItemAction(item=item, handle=lambda: heal(scene_state, item)),
    })

Scenes then call `can_item_be_used` / `use_item` and merge the result of
`use_item` into their state. A scene supporting items keeps an
`item_action` entry in its state; the scene calls `item_action.handle()`
to apply the item.
"""

from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ItemBase:
    """Base structure describing an item."""
    id: str
    type: str
    category: str
    order: int
    price: int
    data: Any = None


@dataclass
class ItemAction:
    """An item that was used, with the function applying it."""
    item: ItemBase
    handle: Callable[[], None]


CanUseItemHandler = Callable[[ItemBase, Any], bool]
UseItemHandler = Callable[[ItemBase, Any], dict[str, Any]]


class ItemRegistry:
    """Item handlers by item type."""

    def __init__(self):
        self._can_be_used_handlers: dict[str, CanUseItemHandler] = {}
        self._use_handlers: dict[str, UseItemHandler] = {}

    def on_can_item_be_used(self, item_type: str, handler: CanUseItemHandler):
        """Register the handler telling if an item of this type can be used."""
        self._can_be_used_handlers[item_type] = handler

    def can_item_be_used(self, item: ItemBase, scene_state: Any) -> bool:
        """Items without handler can never be used."""
        handler = self._can_be_used_handlers.get(item.type)
        if handler is None:
            return False
        return handler(item, scene_state)

    def on_use_item(self, item_type: str, handler: UseItemHandler):
        """Register the handler called when an item of this type is used."""
        self._use_handlers[item_type] = handler

    def use_item(self, item: ItemBase, scene_state: Any) -> dict[str, Any]:
        """Get the scene state update for using an item."""
        handler = self._use_handlers.get(item.type)
        if handler is None:
            return {"item_action": None}
        return handler(item, scene_state)

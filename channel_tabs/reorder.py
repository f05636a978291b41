"""Live drag reordering shared by tabs, bookmarks and folders.

A drag gesture emits ``(drag_index, hover_index)`` every time the pointer
enters a new target.  Each event moves the dragged element to the hovered
position immediately and reports the element's new index, which the caller
feeds back as ``drag_index`` on the next event.  An aborted drag keeps the
last hovered order.

Both functions are pure: they return new lists and never touch their inputs.
Out-of-range or negative indices leave the order unchanged.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def _in_bounds(index: int, length: int) -> bool:
    return 0 <= index < length


def reorder(items: Sequence[T], drag_index: int, hover_index: int) -> tuple[list[T], int]:
    """Move ``items[drag_index]`` to ``hover_index`` within one sequence.

    Returns ``(new_items, new_drag_index)``.  When the move is a no-op or
    invalid, the items are returned in their original order together with the
    unchanged ``drag_index``.
    """
    result = list(items)
    if drag_index == hover_index:
        return result, drag_index
    if not _in_bounds(drag_index, len(result)) or not _in_bounds(
        hover_index, len(result)
    ):
        return result, drag_index
    item = result.pop(drag_index)
    result.insert(hover_index, item)
    return result, hover_index


def transfer(
    source: Sequence[T],
    target: Sequence[T],
    drag_index: int,
    hover_index: int,
) -> tuple[list[T], list[T], int] | None:
    """Move ``source[drag_index]`` into a different sequence.

    The element lands just after the hovered entry of *target*;
    ``hover_index == len(target)`` (including ``0`` for an empty target)
    appends.  Hovering the first entry therefore inserts at index 1: a
    transferred element never lands at index 0 of a non-empty target, and a
    following same-container ``reorder`` event moves it to the front.

    Returns ``(new_source, new_target, new_drag_index)`` or
    ``None`` when either index is out of range.  An emptied source is
    returned as an empty list; callers decide whether to keep it.
    """
    if not _in_bounds(drag_index, len(source)):
        return None
    if not 0 <= hover_index <= len(target):
        return None
    new_source = list(source)
    new_target = list(target)
    item = new_source.pop(drag_index)
    position = min(hover_index + 1, len(new_target))
    new_target.insert(position, item)
    return new_source, new_target, position

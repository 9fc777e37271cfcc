"""Position math - absolute positions and progress percentages for both content models."""

from typing import Union

from ..errors import InvalidPositionError
from ..models.content import ContentItem

# A page index for paged items, or (chapter_index, paragraph_index) for chaptered items
PositionInput = Union[int, tuple[int, int]]


def compute_absolute_position(item: ContentItem, position_input: PositionInput) -> int:
    """
    Flatten a reader position into a single zero-based unit index.

    Paged items: the page index itself.
    Chaptered items: paragraphs in all earlier chapters plus the paragraph index.

    Raises:
        InvalidPositionError: if the input is out of range or has the wrong shape
            for the item's content model. Callers are expected to clamp first.
    """
    if item.is_paged:
        if isinstance(position_input, bool) or not isinstance(position_input, int):
            raise InvalidPositionError(item.id, position_input, "Paged items take a page index")
        if not 0 <= position_input < item.page_count:
            raise InvalidPositionError(item.id, position_input)
        return position_input

    try:
        chapter_index, paragraph_index = position_input
    except (TypeError, ValueError):
        raise InvalidPositionError(
            item.id, position_input, "Chaptered items take a (chapter, paragraph) pair"
        )

    if not 0 <= chapter_index < len(item.chapters):
        raise InvalidPositionError(item.id, position_input)
    if not 0 <= paragraph_index < item.chapters[chapter_index].paragraph_count:
        raise InvalidPositionError(item.id, position_input)

    preceding = sum(c.paragraph_count for c in item.chapters[:chapter_index])
    return preceding + paragraph_index


def compute_progress_percentage(absolute_position: int, total_units: int) -> int:
    """
    Percentage through an item, 0-100.

    round(position / max(total - 1, 1) * 100), rounding halves up. The max() guard
    keeps single-unit items from dividing by zero. A single-unit item has nothing
    left to read once it is visited, so position 0 of 1 is 100%.
    """
    if total_units <= 1:
        return 100

    denominator = max(total_units - 1, 1)
    # Integer half-up rounding: floor(x + 0.5) with x = position * 100 / denominator
    percentage = (2 * absolute_position * 100 + denominator) // (2 * denominator)
    return max(0, min(100, percentage))


def _as_index(item: ContentItem, position_input, value) -> int:
    if isinstance(value, bool):
        raise InvalidPositionError(item.id, position_input, "Position indexes must be integers")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidPositionError(item.id, position_input, "Position indexes must be integers")


def clamp_position(item: ContentItem, position_input: PositionInput) -> PositionInput:
    """
    Clamp a raw reader position into the item's valid range.

    A (chapter, paragraph) pair given for a paged item uses its first element as
    the page. A single index given for a chaptered item is treated as an absolute
    position and resolved to its chapter and paragraph.

    Raises:
        InvalidPositionError: if the input can't be read as an index or pair.
    """
    if item.is_paged:
        if isinstance(position_input, (tuple, list)):
            if not position_input:
                raise InvalidPositionError(item.id, position_input, "Empty position")
            position_input = position_input[0]
        page = _as_index(item, position_input, position_input)
        return max(0, min(item.page_count - 1, page))

    if not isinstance(position_input, (tuple, list)):
        absolute = _as_index(item, position_input, position_input)
        return resolve_position(item, max(0, min(item.total_units - 1, absolute)))

    if len(position_input) != 2:
        raise InvalidPositionError(
            item.id, position_input, "Chaptered items take a (chapter, paragraph) pair"
        )
    chapter_index = _as_index(item, position_input, position_input[0])
    paragraph_index = _as_index(item, position_input, position_input[1])
    chapter_index = max(0, min(len(item.chapters) - 1, chapter_index))
    last_paragraph = item.chapters[chapter_index].paragraph_count - 1
    paragraph_index = max(0, min(last_paragraph, paragraph_index))
    return chapter_index, paragraph_index


def resolve_position(item: ContentItem, absolute_position: int) -> PositionInput:
    """
    Map an absolute position back to a page index or (chapter, paragraph) pair.

    Used to resume reading from a history entry.
    """
    if not 0 <= absolute_position < item.total_units:
        raise InvalidPositionError(item.id, absolute_position)

    if item.is_paged:
        return absolute_position

    remaining = absolute_position
    for chapter_index, chapter in enumerate(item.chapters):
        if remaining < chapter.paragraph_count:
            return chapter_index, remaining
        remaining -= chapter.paragraph_count

    # Unreachable while absolute_position < total_units
    raise InvalidPositionError(item.id, absolute_position)

def move_item(items: list, from_index: int, to_index: int) -> None:
    """Move an element to a new position in place.

    Elements between the two positions shift by one slot toward the vacated
    position. Bounds are the caller's responsibility.

    Args:
        items: List to modify
        from_index: Current position of the element
        to_index: Position the element ends up at
    """
    if from_index == to_index:
        return

    item = items.pop(from_index)
    items.insert(to_index, item)

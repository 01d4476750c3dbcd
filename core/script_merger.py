"""
Merge reconstructed code into a code buffer

The insertion point is an exact literal marker ("Your code starts here")
placed in every language template. A buffer without the marker is a
normal case: the text is appended instead.
"""

from .config import INSERTION_MARKER


def find_insertion_point(buffer: str, marker: str = INSERTION_MARKER) -> int:
    """
    Index right after the first occurrence of marker

    Returns:
        Insertion index, or -1 if the marker is absent
    """
    if not marker:
        return -1
    start = buffer.find(marker)
    if start < 0:
        return -1
    return start + len(marker)


def merge(buffer: str, text: str, marker: str = INSERTION_MARKER) -> str:
    """
    Splice text into buffer

    Marker present: "\\n" + text is inserted right after the marker.
    Marker absent: "\\n" + text is appended to the buffer.

    Args:
        buffer: Current code buffer
        text: Reconstructed code
        marker: Literal insertion marker

    Returns:
        New buffer (the input is not modified)
    """
    position = find_insertion_point(buffer, marker)
    if position < 0:
        return buffer + "\n" + text
    return buffer[:position] + "\n" + text + buffer[position:]

# utils/_repr.py
"""Canonical string representation for objects with a ``__str__()`` method."""

__all__ = [
    "str2repr",
]


def str2repr(obj) -> str:
    """Unique object identifier followed by ``str(obj)``, with trailing
    whitespace removed so that multi-line dumps print cleanly.
    """
    uniqueID = f"<{obj.__class__.__name__} object at {hex(id(obj))}>"
    if not (body := str(obj).rstrip()):
        return uniqueID
    return f"{uniqueID}\n{body}"

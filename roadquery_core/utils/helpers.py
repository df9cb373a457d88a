"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations


def normalize_fragment(fragment: str, strip_leading_slash: bool = True) -> str:
    """Normalize a fragment before matching.

    Drops a leading ``#`` and trailing whitespace. With
    ``strip_leading_slash`` a leading ``/`` is dropped as well.
    """
    if fragment.startswith("#"):
        fragment = fragment[1:]

    if strip_leading_slash and fragment.startswith("/"):
        fragment = fragment[1:]

    return fragment.rstrip()


def append_querystring(path: str, querystring: str) -> str:
    """Append a querystring, joining with ``?`` or ``&`` as needed."""
    if not querystring:
        return path

    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{querystring}"


__all__ = [
    "normalize_fragment",
    "append_querystring",
]

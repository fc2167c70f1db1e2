from __future__ import annotations


def split_comma_list(raw: str) -> list[str]:
    """Split a comma-separated string into trimmed items, dropping blanks.

    >>> split_comma_list("node, react , express")
    ['node', 'react', 'express']
    """
    return [item.strip() for item in raw.split(",") if item.strip()]

from __future__ import annotations

"""
Numeric-Aware Ordering.

Sort keys that compare embedded digit runs by value, so that
'file.2.log' orders before 'file.10.log'.
"""

import os
import re
from typing import List, Tuple, Union

_DIGIT_RUNS = re.compile(r"(\d+)")

Token = Tuple[int, Union[int, str]]


def natural_sort_key(name: str) -> List[Token]:
    """
    Split a name into alternating text/digit tokens for ordering.

    Tokens are tagged so that a digit run never compares against text:
    text runs sort as strings, digit runs as integers.

    Args:
        name: File name or path.

    Returns:
        List[Token]: Comparable key.
    """
    key: List[Token] = []
    for part in _DIGIT_RUNS.split(name):
        if not part:
            continue
        if part.isdigit():
            key.append((1, int(part)))
        else:
            key.append((0, part))
    return key


def natural_sorted(paths: List[str]) -> List[str]:
    """Sort paths by their base names using natural_sort_key."""
    return sorted(paths, key=lambda p: natural_sort_key(os.path.basename(p)))

"""
High Score Store
================

Persists the best score as a single raw native-endian 4-byte integer
with no header.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

import numpy as np

SCORE_DTYPE = np.dtype("=i4")


def load_high_score(path: Union[str, Path]) -> int:
    """
    Read the high score file.

    Args:
        path: Score file location.

    Returns:
        Stored score, or 0 if the file is missing, short or unreadable.
    """
    path = Path(path)
    if not path.is_file():
        return 0

    try:
        data = path.read_bytes()
    except OSError:
        return 0

    if len(data) < SCORE_DTYPE.itemsize:
        return 0
    value = np.frombuffer(data, dtype=SCORE_DTYPE, count=1)[0]
    return max(0, int(value))


def save_high_score(path: Union[str, Path], score: int) -> None:
    """
    Write the high score file, replacing any previous contents.

    Args:
        path: Score file location.
        score: Score to store; clipped to the int32 range.
    """
    info = np.iinfo(SCORE_DTYPE)
    value = min(max(int(score), 0), info.max)

    path = Path(path)
    if path.parent and not path.parent.exists():
        os.makedirs(path.parent, exist_ok=True)
    np.array([value], dtype=SCORE_DTYPE).tofile(path)

"""Compact encodings for grid frames sent over HTTP and Socket.IO.

Rows:
  - Input: a row string with one kind character per tile (e.g. ``"VVVRRRC"``).
  - Run-length encoded as ``L:<count><char>...`` (``"L:3V3R1C"``).
  - If the encoding is not shorter than the raw row, the raw row is kept.

Coordinates (corridor probe overlays):
  - Input: iterable of ``(col, row)`` pairs (unordered).
  - Sorted, then delta-encoded: ``D:c0,r0|dc1,dr1|...``.

Kind characters are never digits or ``:``, so both markers are unambiguous.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

_RUN = re.compile(r"(\d+)(\D)")


def encode_row(row: str) -> str:
    """Run-length encode a row string, returning it unchanged if not shorter."""
    if not row:
        return row
    pieces = []
    run_char, run_len = row[0], 0
    for ch in row:
        if ch == run_char:
            run_len += 1
            continue
        pieces.append(f"{run_len}{run_char}")
        run_char, run_len = ch, 1
    pieces.append(f"{run_len}{run_char}")
    encoded = "L:" + "".join(pieces)
    return encoded if len(encoded) < len(row) else row


def decode_row(data: str) -> str:
    """Inverse of :func:`encode_row`; raw rows pass through.

    Raises:
        ValueError: malformed ``L:`` payload.
    """
    if not data.startswith("L:"):
        return data
    body = data[2:]
    runs = _RUN.findall(body)
    if "".join(n + ch for n, ch in runs) != body:
        raise ValueError(f"malformed run-length row {data!r}")
    return "".join(ch * int(n) for n, ch in runs)


def encode_rows(rows: Sequence[str]) -> List[str]:
    return [encode_row(r) for r in rows]


def decode_rows(rows: Sequence[str]) -> List[str]:
    return [decode_row(r) for r in rows]


def encode_coords(coords: Iterable[Tuple[int, int]]) -> str:
    """Delta-encode a set of non-negative ``(col, row)`` pairs."""
    ordered = sorted(coords)
    if not ordered:
        return ""
    pieces = []
    prev = None
    for col, row in ordered:
        if prev is None:
            pieces.append(f"{col},{row}")
        else:
            pieces.append(f"{col - prev[0]},{row - prev[1]}")
        prev = (col, row)
    return "D:" + "|".join(pieces)


def decode_coords(data: str) -> List[Tuple[int, int]]:
    """Inverse of :func:`encode_coords`.

    Raises:
        ValueError: input lacks the ``D:`` marker or holds a malformed pair.
    """
    if not data:
        return []
    if not data.startswith("D:"):
        raise ValueError(f"not a coordinate payload: {data!r}")
    coords = []
    prev = None
    for token in data[2:].split("|"):
        c_s, r_s = token.split(",")
        dc, dr = int(c_s), int(r_s)
        cur = (dc, dr) if prev is None else (prev[0] + dc, prev[1] + dr)
        coords.append(cur)
        prev = cur
    return coords


__all__ = ["encode_row", "decode_row", "encode_rows", "decode_rows", "encode_coords", "decode_coords"]

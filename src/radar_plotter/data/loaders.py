import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

TAB = "\t"
COMMA = ","

# Leading numeric prefix, so "86.3%" reads as 86.3.
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class Table:
    """Header cells plus data rows, every row exactly as long as the header."""

    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]

    @property
    def width(self) -> int:
        return len(self.headers)

    def __len__(self) -> int:
        return len(self.rows)


def load_text_file(path: str) -> str:
    """Load a pasted-table text file from disk."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def detect_delimiter(text: str) -> str:
    """Tab if the first non-empty line holds a tab, comma otherwise. One decision per document."""
    for line in str(text).split("\n"):
        if line.strip():
            return TAB if TAB in line else COMMA
    return COMMA


def split_row(line: str, delimiter: str) -> List[str]:
    # Plain split: no quoting or escaping.
    return [cell.strip() for cell in line.split(delimiter)]


def _fit_row(cells: List[str], width: int) -> Tuple[str, ...]:
    if len(cells) < width:
        cells = cells + [""] * (width - len(cells))
    return tuple(cells[:width])


def parse_table(text: Any) -> Optional[Table]:
    """
    Parse tab- or comma-delimited text into a Table.

    Blank lines are skipped. Returns None (never raises) when the input is not
    text or fewer than two lines remain, since a header row and at least one
    data row are required.
    """
    if not isinstance(text, str):
        return None
    lines = [ln for ln in text.strip().split("\n") if ln.strip()]
    if len(lines) < 2:
        return None

    delimiter = detect_delimiter(lines[0])
    headers = tuple(split_row(lines[0], delimiter))
    rows = tuple(_fit_row(split_row(ln, delimiter), len(headers)) for ln in lines[1:])
    return Table(headers=headers, rows=rows)


def parse_number(value: Any, default: float = 0.0) -> float:
    """
    Lenient float parse: anything that is not a finite number becomes `default`.

    Strings are read up to the end of their leading number ("86.3%" -> 86.3).
    Partial pastes should still render, so empty, missing and non-numeric
    cells are not an error.
    """
    if value is None or isinstance(value, bool):
        return float(default)
    if isinstance(value, str):
        m = _NUMBER_PREFIX.match(value.strip())
        if not m:
            return float(default)
        out = float(m.group(0))
    else:
        try:
            out = float(value)
        except (TypeError, ValueError):
            return float(default)
    if not math.isfinite(out):
        return float(default)
    return out


def coerce_numeric(series: pd.Series, default: float = 0.0) -> pd.Series:
    """Column-wise `parse_number`: pandas coercion first, prefix parse for the leftovers."""
    x = pd.to_numeric(series, errors="coerce").astype(float)
    bad = ~np.isfinite(x.to_numpy(dtype=float))
    if bad.any():
        x.loc[bad] = [parse_number(v, default) for v in series.loc[bad]]
    return x


def make_unique_name(name: str, existing_names: Iterable[str]) -> str:
    existing = set(existing_names)
    base = str(name).strip()
    if base not in existing:
        return base
    i = 2
    while f"{base} ({i})" in existing:
        i += 1
    return f"{base} ({i})"

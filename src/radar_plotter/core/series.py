from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

import pandas as pd

from radar_plotter.data.loaders import Table, coerce_numeric, make_unique_name, parse_table


@dataclass(frozen=True)
class SeriesModel:
    """Dimension-major view of a parsed table: axes, plotted series and their values."""

    dimensions: tuple[str, ...] = ()
    series: tuple[str, ...] = ()
    values: Mapping[tuple[str, str], float] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.dimensions or not self.series

    def value(self, dimension: str, series: str, default: float = 0.0) -> float:
        return float(self.values.get((dimension, series), default))

    def dimension_values(self, dimension: str) -> list[float]:
        return [self.value(dimension, s) for s in self.series]

    def series_values(self, series: str) -> dict[str, float]:
        return {d: self.value(d, series) for d in self.dimensions}

    def to_frame(self) -> pd.DataFrame:
        """One row per dimension, one column per series, in source order."""
        data = {s: [self.value(d, s) for d in self.dimensions] for s in self.series}
        return pd.DataFrame(data, index=pd.Index(list(self.dimensions), name="dimension"), dtype=float)


def _unique_dimensions(headers: tuple[str, ...]) -> tuple[str, ...]:
    out: list[str] = []
    for name in headers:
        out.append(make_unique_name(name, out))
    return tuple(out)


def build_series_model(table: Table) -> SeriesModel:
    """
    Transpose a Table into a SeriesModel.

    The first header cell only labels the name column. Repeated series names
    keep their first position but take the values of the last row (last write
    wins). Cells that are not numbers become 0.
    """
    dimensions = _unique_dimensions(table.headers[1:])
    if not table.rows:
        return SeriesModel(dimensions=dimensions)

    frame = pd.DataFrame(list(table.rows), columns=range(table.width), dtype=object)
    names = frame[0].astype(str).tolist()

    values: dict[tuple[str, str], float] = {}
    for col, dim in enumerate(dimensions, start=1):
        numeric = coerce_numeric(frame[col])
        for name, v in zip(names, numeric.tolist()):
            values[(dim, name)] = float(v)

    series = tuple(dict.fromkeys(names))
    return SeriesModel(dimensions=dimensions, series=series, values=MappingProxyType(values))


def parse_series_model(text) -> Optional[SeriesModel]:
    table = parse_table(text)
    if table is None:
        return None
    return build_series_model(table)

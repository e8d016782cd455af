"""CSV ingestion: Date, Open, High, Low, Close exports to ordered bars."""
from __future__ import annotations

from pathlib import Path
from typing import IO

import pandas as pd

from .bars import Bar

PRICE_COLUMNS = ("open", "high", "low", "close")
COLUMNS = ("time",) + PRICE_COLUMNS

_EPOCH = pd.Timestamp(0, tz="UTC")


def bars_from_frame(frame: pd.DataFrame) -> list[Bar]:
    """Convert the first five columns of ``frame`` to bars.

    Rows with an unparsable date or a non-numeric price are dropped. Dates are
    normalised to integer Unix seconds (UTC) and the result is sorted by time.
    """
    if frame.shape[1] < len(COLUMNS):
        raise ValueError(
            f"Expected at least {len(COLUMNS)} columns (Date, Open, High, Low, Close), got {frame.shape[1]}."
        )

    data = frame.iloc[:, : len(COLUMNS)].copy()
    data.columns = list(COLUMNS)
    stamps = pd.to_datetime(data["time"].astype(str).str.strip(), errors="coerce", utc=True, format="mixed")
    prices = data.loc[:, list(PRICE_COLUMNS)].apply(pd.to_numeric, errors="coerce")

    clean = prices.assign(time=stamps).dropna()
    clean = clean.assign(time=(clean["time"] - _EPOCH) // pd.Timedelta(seconds=1))
    clean = clean.sort_values("time", kind="stable")

    return [
        Bar(
            time=int(row.time),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
        )
        for row in clean.itertuples(index=False)
    ]


def load_bars_csv(source: Path | str | IO[str]) -> list[Bar]:
    """Read a CSV export with a header row into an ordered bar list."""
    frame = pd.read_csv(source, header=0, index_col=False, skip_blank_lines=True)
    return bars_from_frame(frame)

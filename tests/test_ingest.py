import io

import pandas as pd
import pytest

from tradevision.bars import Bar
from tradevision.ingest import bars_from_frame, load_bars_csv

JAN_1_2024 = 1_704_067_200


def test_load_bars_csv_parses_rows(write_csv):
    path = write_csv(
        [
            "Date,Open,High,Low,Close",
            "2024-01-01,100,105,99,104",
            "2024-01-02,104,106,101,102.5",
        ]
    )
    bars = load_bars_csv(path)
    assert bars == [
        Bar(time=JAN_1_2024, open=100.0, high=105.0, low=99.0, close=104.0),
        Bar(time=JAN_1_2024 + 86400, open=104.0, high=106.0, low=101.0, close=102.5),
    ]
    assert all(isinstance(bar.time, int) for bar in bars)


def test_malformed_rows_are_dropped(write_csv):
    path = write_csv(
        [
            "Date,Open,High,Low,Close",
            "2024-01-01,100,105,99,104",
            "not-a-date,1,2,3,4",
            "2024-01-03,1,2",
            "",
            "2024-01-04,abc,2,1,1.5",
            "2024-01-05,10,12,9,11",
        ]
    )
    bars = load_bars_csv(path)
    assert [bar.time for bar in bars] == [JAN_1_2024, JAN_1_2024 + 4 * 86400]


def test_rows_are_sorted_by_time():
    source = io.StringIO(
        "Date,Open,High,Low,Close\n"
        "2024-01-03,3,3,3,3\n"
        "2024-01-01,1,1,1,1\n"
        "2024-01-02,2,2,2,2\n"
    )
    bars = load_bars_csv(source)
    assert [bar.close for bar in bars] == [1.0, 2.0, 3.0]


def test_intraday_timestamps_keep_seconds(write_csv):
    path = write_csv(
        [
            "time,open,high,low,close,Volume",
            "2024-01-01 09:30:00,1,1,1,1,100",
            "2024-01-01 09:31:00,1,1,1,1,120",
        ]
    )
    bars = load_bars_csv(path)
    assert bars[0].time == JAN_1_2024 + 9 * 3600 + 30 * 60
    assert bars[1].time - bars[0].time == 60


def test_too_few_columns_rejected():
    frame = pd.DataFrame({"Date": ["2024-01-01"], "Close": [1.0]})
    with pytest.raises(ValueError):
        bars_from_frame(frame)


def test_header_only_file_yields_no_bars(write_csv):
    assert load_bars_csv(write_csv(["Date,Open,High,Low,Close"])) == []

"""Candle series validation and file loaders."""

from __future__ import annotations

import csv
import json
import math
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from tradedash.errors import MalformedInputError
from tradedash.strategy.market_data import Candle

CandleBook = dict[str, dict[str, list[Candle]]]

_CSV_FIELDS = ("symbol", "timeframe", "time", "open", "high", "low", "close")


def validate_series(candles: Sequence[Candle], label: str = "series") -> None:
    previous_time: Optional[int] = None
    for index, candle in enumerate(candles):
        if previous_time is not None and candle.time <= previous_time:
            kind = "duplicate" if candle.time == previous_time else "non-monotonic"
            raise MalformedInputError(
                f"{label}: {kind} timestamp {candle.time} at index {index} (previous {previous_time})"
            )
        prices = (candle.open, candle.high, candle.low, candle.close)
        if not all(math.isfinite(price) for price in prices):
            raise MalformedInputError(f"{label}: non-finite price at index {index}")
        if candle.close <= 0:
            raise MalformedInputError(f"{label}: non-positive close {candle.close} at index {index}")
        if candle.high < candle.low:
            raise MalformedInputError(
                f"{label}: high {candle.high} below low {candle.low} at index {index}"
            )
        if not math.isfinite(candle.volume) or candle.volume < 0:
            raise MalformedInputError(f"{label}: invalid volume {candle.volume!r} at index {index}")
        previous_time = candle.time


def filter_time_range(
    candles: Sequence[Candle],
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
) -> list[Candle]:
    return [
        candle
        for candle in candles
        if (start_time is None or candle.time >= start_time)
        and (end_time is None or candle.time <= end_time)
    ]


def candle_from_dict(data: dict[str, Any]) -> Candle:
    try:
        return Candle(
            time=int(data["time"]),
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
            volume=float(data.get("volume") or 0.0),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedInputError(f"Invalid candle record {data!r}") from exc


def _build_book(rows: Iterable[tuple[str, str, Candle]]) -> CandleBook:
    book: CandleBook = {}
    for symbol, timeframe, candle in rows:
        book.setdefault(symbol, {}).setdefault(timeframe, []).append(candle)
    for symbol, timeframes in book.items():
        for timeframe, candles in timeframes.items():
            candles.sort(key=lambda candle: candle.time)
            validate_series(candles, f"{symbol} {timeframe}")
    return book


def load_candles_json(path: str | Path) -> CandleBook:
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise MalformedInputError("Candle file must map symbol -> timeframe -> candles")
    rows = []
    for symbol, timeframes in data.items():
        if not isinstance(timeframes, dict):
            raise MalformedInputError(f"{symbol}: expected a timeframe mapping")
        for timeframe, records in timeframes.items():
            for record in records:
                rows.append((str(symbol), str(timeframe), candle_from_dict(record)))
    return _build_book(rows)


def load_candles_csv(path: str | Path) -> CandleBook:
    path = Path(path)
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        missing = [name for name in _CSV_FIELDS if name not in (reader.fieldnames or [])]
        if missing:
            raise MalformedInputError(f"Candle CSV missing columns: {', '.join(missing)}")
        rows = [(row["symbol"], row["timeframe"], candle_from_dict(row)) for row in reader]
    return _build_book(rows)


def load_candles(path: str | Path) -> CandleBook:
    path = Path(path)
    if path.suffix.lower() == ".csv":
        return load_candles_csv(path)
    return load_candles_json(path)

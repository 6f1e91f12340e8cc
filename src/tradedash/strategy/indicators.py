"""Common indicator helpers for strategies.

Every helper returns the full indicator series computed left to right, so the
value at a given position only depends on inputs up to that position. Series
are shorter than their inputs by the indicator's lookback; callers index them
from the end.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from tradedash.strategy.market_data import Candle


@dataclass(frozen=True)
class Bands:
    middle: float
    upper: float
    lower: float

    @property
    def bandwidth_pct(self) -> float:
        if self.middle == 0:
            return 0.0
        return (self.upper - self.lower) / self.middle * 100.0


@dataclass(frozen=True)
class DirectionalIndex:
    adx: float
    plus_di: float
    minus_di: float


@dataclass(frozen=True)
class StochasticPoint:
    k: float
    d: float


def sma(values: Sequence[float], window: int) -> list[float]:
    if window <= 0 or len(values) < window:
        return []
    return [sum(values[end - window : end]) / window for end in range(window, len(values) + 1)]


def ema(values: Sequence[float], window: int) -> list[float]:
    if window <= 0 or len(values) < window:
        return []
    alpha = 2.0 / (window + 1.0)
    result = [sum(values[:window]) / window]
    for value in values[window:]:
        result.append(alpha * value + (1.0 - alpha) * result[-1])
    return result


def stddev(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((value - mean) ** 2 for value in values) / len(values)
    return variance**0.5


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0 if avg_gain > 0 else 50.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def rsi(closes: Sequence[float], period: int) -> list[float]:
    """Wilder RSI; one value per close from index ``period`` onward."""
    if period <= 0 or len(closes) < period + 1:
        return []
    changes = [closes[i] - closes[i - 1] for i in range(1, len(closes))]
    avg_gain = sum(max(change, 0.0) for change in changes[:period]) / period
    avg_loss = sum(max(-change, 0.0) for change in changes[:period]) / period
    result = [_rsi_value(avg_gain, avg_loss)]
    for change in changes[period:]:
        avg_gain = (avg_gain * (period - 1) + max(change, 0.0)) / period
        avg_loss = (avg_loss * (period - 1) + max(-change, 0.0)) / period
        result.append(_rsi_value(avg_gain, avg_loss))
    return result


def bollinger(closes: Sequence[float], window: int, stddevs: float) -> list[Bands]:
    result: list[Bands] = []
    if window <= 0:
        return result
    for end in range(window, len(closes) + 1):
        slice_ = closes[end - window : end]
        mean = sum(slice_) / window
        deviation = stddev(slice_)
        result.append(Bands(mean, mean + stddevs * deviation, mean - stddevs * deviation))
    return result


class IndicatorSeries:
    """Column view over a candle sequence with the price-based indicators."""

    def __init__(self, candles: Sequence[Candle] = ()) -> None:
        self.times: list[int] = []
        self.opens: list[float] = []
        self.highs: list[float] = []
        self.lows: list[float] = []
        self.closes: list[float] = []
        self.volumes: list[float] = []
        for candle in candles:
            self.update(candle)

    def __len__(self) -> int:
        return len(self.closes)

    def update(self, candle: Candle) -> None:
        self.times.append(candle.time)
        self.opens.append(candle.open)
        self.highs.append(candle.high)
        self.lows.append(candle.low)
        self.closes.append(candle.close)
        self.volumes.append(candle.volume or 0.0)

    def true_ranges(self) -> list[float]:
        """True range for every candle after the first."""
        ranges = []
        for index in range(1, len(self.closes)):
            high = self.highs[index]
            low = self.lows[index]
            prev_close = self.closes[index - 1]
            ranges.append(max(high - low, abs(high - prev_close), abs(low - prev_close)))
        return ranges

    def atr(self, period: int) -> list[float]:
        """Wilder ATR; ``atr(period)[k]`` belongs to candle ``period + k``."""
        true_ranges = self.true_ranges()
        if period <= 0 or len(true_ranges) < period:
            return []
        result = [sum(true_ranges[:period]) / period]
        for tr in true_ranges[period:]:
            result.append((result[-1] * (period - 1) + tr) / period)
        return result

    def adx(self, period: int) -> list[DirectionalIndex]:
        if period <= 0 or len(self.closes) < period + 1:
            return []
        trs: list[float] = []
        plus_dm: list[float] = []
        minus_dm: list[float] = []
        for idx in range(1, len(self.closes)):
            high = self.highs[idx]
            low = self.lows[idx]
            prev_close = self.closes[idx - 1]
            up_move = high - self.highs[idx - 1]
            down_move = self.lows[idx - 1] - low
            trs.append(max(high - low, abs(high - prev_close), abs(low - prev_close)))
            plus_dm.append(up_move if up_move > down_move and up_move > 0 else 0.0)
            minus_dm.append(down_move if down_move > up_move and down_move > 0 else 0.0)

        tr_sum = sum(trs[:period])
        plus_sum = sum(plus_dm[:period])
        minus_sum = sum(minus_dm[:period])
        directional: list[tuple[float, float, float]] = []
        for index in range(period, len(trs) + 1):
            if index > period:
                tr_sum = tr_sum - tr_sum / period + trs[index - 1]
                plus_sum = plus_sum - plus_sum / period + plus_dm[index - 1]
                minus_sum = minus_sum - minus_sum / period + minus_dm[index - 1]
            if tr_sum <= 0:
                plus_di = minus_di = 0.0
            else:
                plus_di = 100.0 * plus_sum / tr_sum
                minus_di = 100.0 * minus_sum / tr_sum
            denom = plus_di + minus_di
            dx = 0.0 if denom <= 0 else 100.0 * abs(plus_di - minus_di) / denom
            directional.append((dx, plus_di, minus_di))

        if len(directional) < period:
            return []
        adx_value = sum(dx for dx, _, _ in directional[:period]) / period
        _, plus_di, minus_di = directional[period - 1]
        result = [DirectionalIndex(adx_value, plus_di, minus_di)]
        for dx, plus_di, minus_di in directional[period:]:
            adx_value = (adx_value * (period - 1) + dx) / period
            result.append(DirectionalIndex(adx_value, plus_di, minus_di))
        return result

    def cci(self, period: int) -> list[float]:
        if period <= 0:
            return []
        typical = [
            (high + low + close) / 3.0
            for high, low, close in zip(self.highs, self.lows, self.closes)
        ]
        result = []
        for end in range(period, len(typical) + 1):
            window = typical[end - period : end]
            mean = sum(window) / period
            mean_deviation = sum(abs(value - mean) for value in window) / period
            if mean_deviation == 0:
                result.append(0.0)
            else:
                result.append((window[-1] - mean) / (0.015 * mean_deviation))
        return result

    def _range_position(self, period: int) -> list[tuple[float, float, float]]:
        points = []
        for end in range(period, len(self.closes) + 1):
            highest = max(self.highs[end - period : end])
            lowest = min(self.lows[end - period : end])
            points.append((highest, lowest, self.closes[end - 1]))
        return points

    def stochastic(self, k_period: int, d_period: int) -> list[StochasticPoint]:
        if k_period <= 0 or d_period <= 0:
            return []
        k_values = []
        for highest, lowest, close in self._range_position(k_period):
            span = highest - lowest
            k_values.append(50.0 if span == 0 else (close - lowest) / span * 100.0)
        d_values = sma(k_values, d_period)
        offset = len(k_values) - len(d_values)
        return [StochasticPoint(k_values[offset + i], d) for i, d in enumerate(d_values)]

    def williams_r(self, period: int) -> list[float]:
        if period <= 0:
            return []
        values = []
        for highest, lowest, close in self._range_position(period):
            span = highest - lowest
            values.append(-50.0 if span == 0 else (highest - close) / span * -100.0)
        return values

    def parabolic_sar(self, step: float, max_step: float) -> list[float]:
        count = len(self.closes)
        if count < 2:
            return []
        highs, lows, closes = self.highs, self.lows, self.closes
        uptrend = closes[1] > closes[0]
        sar = [0.0] * count
        extreme = [0.0] * count
        factor = step
        sar[0] = min(lows[0], lows[1]) if uptrend else max(highs[0], highs[1])
        extreme[0] = highs[1] if uptrend else lows[1]
        sar[1] = sar[0]

        for i in range(2, count):
            sar[i] = sar[i - 1] + factor * (extreme[i - 2] - sar[i - 1])
            if (uptrend and closes[i] < sar[i]) or (not uptrend and closes[i] > sar[i]):
                uptrend = not uptrend
                sar[i] = min(lows[i - 2 : i + 1]) if uptrend else max(highs[i - 2 : i + 1])
                factor = step
                extreme[i - 1] = highs[i] if uptrend else lows[i]
            elif uptrend:
                sar[i] = min(sar[i], lows[i - 1], lows[i - 2])
                if highs[i] > extreme[i - 2]:
                    extreme[i - 1] = highs[i]
                    factor = min(factor + step, max_step)
                else:
                    extreme[i - 1] = extreme[i - 2]
            else:
                sar[i] = max(sar[i], highs[i - 1], highs[i - 2])
                if lows[i] < extreme[i - 2]:
                    extreme[i - 1] = lows[i]
                    factor = min(factor + step, max_step)
                else:
                    extreme[i - 1] = extreme[i - 2]
        return sar

    def vwap(self, period: int) -> list[float]:
        """Running VWAP, re-anchored after every ``period`` candles."""
        values = []
        cumulative_pv = 0.0
        cumulative_volume = 0.0
        for index in range(len(self.closes)):
            typical = (self.highs[index] + self.lows[index] + self.closes[index]) / 3.0
            volume = self.volumes[index]
            cumulative_pv += typical * volume
            cumulative_volume += volume
            values.append(cumulative_pv / cumulative_volume if cumulative_volume > 0 else typical)
            if index >= period and index % period == period - 1:
                cumulative_pv = 0.0
                cumulative_volume = 0.0
        return values


def heikin_ashi(candles: Sequence[Candle]) -> list[Candle]:
    if not candles:
        return []
    first = candles[0]
    result = [
        Candle(
            time=first.time,
            open=(first.open + first.close) / 2.0,
            high=first.high,
            low=first.low,
            close=(first.open + first.high + first.low + first.close) / 4.0,
            volume=first.volume,
        )
    ]
    for candle in candles[1:]:
        prev = result[-1]
        ha_open = (prev.open + prev.close) / 2.0
        ha_close = (candle.open + candle.high + candle.low + candle.close) / 4.0
        result.append(
            Candle(
                time=candle.time,
                open=ha_open,
                high=max(candle.high, ha_open, ha_close),
                low=min(candle.low, ha_open, ha_close),
                close=ha_close,
                volume=candle.volume,
            )
        )
    return result

"""Indicator signal generators.

Each generator maps a chronologically ordered candle sequence to one
:class:`IndicatorSignal` describing the last candle. Generators only read the
sequence they are given and fall back to a neutral signal when the history is
shorter than their lookback or the prices are degenerate.
"""

from __future__ import annotations

from typing import Sequence

from tradedash.strategy.indicators import IndicatorSeries, bollinger, ema, heikin_ashi, rsi, sma
from tradedash.strategy.market_data import Candle
from tradedash.strategy.models import IndicatorSignal


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def mean_reversion_signal(candles: Sequence[Candle], period: int = 14) -> IndicatorSignal:
    if len(candles) < period + 1:
        return IndicatorSignal.neutral()
    closes = [candle.close for candle in candles]
    last_sma = sma(closes, period)[-1]
    if last_sma == 0:
        return IndicatorSignal.neutral()

    last_price = closes[-1]
    prev_price = closes[-2]
    deviation = abs((last_price - last_sma) / last_sma) * 100.0
    strength = min(deviation / 5.0 * 100.0, 100.0)

    if last_price < last_sma and last_price > prev_price:
        return IndicatorSignal.buy(strength, sma=last_sma, price=last_price, deviation=deviation)
    if last_price > last_sma and last_price < prev_price:
        return IndicatorSignal.sell(strength, sma=last_sma, price=last_price, deviation=deviation)
    return IndicatorSignal.neutral()


def ema_crossover_signal(
    candles: Sequence[Candle], short_period: int = 9, long_period: int = 21
) -> IndicatorSignal:
    if len(candles) < long_period + 2:
        return IndicatorSignal.neutral()
    closes = [candle.close for candle in candles]
    short_ema = ema(closes, short_period)
    long_ema = ema(closes, long_period)
    if len(short_ema) < 2 or len(long_ema) < 2 or long_ema[-1] == 0:
        return IndicatorSignal.neutral()

    current_short, previous_short = short_ema[-1], short_ema[-2]
    current_long, previous_long = long_ema[-1], long_ema[-2]
    crossed_above = previous_short <= previous_long and current_short > current_long
    crossed_below = previous_short >= previous_long and current_short < current_long

    ema_diff = abs(current_short - current_long) / current_long * 100.0
    strength = min(ema_diff / 0.5 * 100.0, 100.0)

    if crossed_above:
        return IndicatorSignal.buy(strength, short_ema=current_short, long_ema=current_long)
    if crossed_below:
        return IndicatorSignal.sell(strength, short_ema=current_short, long_ema=current_long)
    return IndicatorSignal.neutral()


def rsi_divergence_signal(
    candles: Sequence[Candle], period: int = 14, lookback: int = 10
) -> IndicatorSignal:
    """RSI extremes, boosted when price and RSI disagree across the lookback.

    The lookback is split in an earlier and a recent half; a higher recent
    price high with a lower RSI reading is bearish, a lower recent low with a
    higher RSI reading is bullish.
    """
    if lookback < 2 or len(candles) < period + lookback:
        return IndicatorSignal.neutral()
    closes = [candle.close for candle in candles]
    rsi_values = rsi(closes, period)
    if len(rsi_values) < lookback:
        return IndicatorSignal.neutral()

    prices = closes[-lookback:]
    readings = rsi_values[-lookback:]
    half = lookback // 2
    earlier = range(0, half)
    recent = range(half, lookback)

    earlier_high = max(earlier, key=lambda i: prices[i])
    recent_high = max(recent, key=lambda i: prices[i])
    earlier_low = min(earlier, key=lambda i: prices[i])
    recent_low = min(recent, key=lambda i: prices[i])

    bearish = prices[recent_high] > prices[earlier_high] and readings[recent_high] < readings[earlier_high]
    bullish = prices[recent_low] < prices[earlier_low] and readings[recent_low] > readings[earlier_low]

    current = rsi_values[-1]
    modifier = 0.0
    if current > 70:
        modifier = (current - 70) * 3.33
    if current < 30:
        modifier = (30 - current) * 3.33

    if bullish:
        return IndicatorSignal.buy(50 + modifier, rsi=current, divergence=True)
    if bearish:
        return IndicatorSignal.sell(50 + modifier, rsi=current, divergence=True)
    if current < 30:
        return IndicatorSignal.buy(modifier, rsi=current)
    if current > 70:
        return IndicatorSignal.sell(modifier, rsi=current)
    return IndicatorSignal.neutral()


def bollinger_squeeze_signal(
    candles: Sequence[Candle], period: int = 20, stddevs: float = 2.0
) -> IndicatorSignal:
    if len(candles) < period + 5:
        return IndicatorSignal.neutral()
    closes = [candle.close for candle in candles]
    bands = bollinger(closes, period, stddevs)
    if len(bands) < 5:
        return IndicatorSignal.neutral()

    bandwidths = [band.bandwidth_pct for band in bands[-5:]]
    narrowing = bandwidths[0] > bandwidths[-1]
    current_bandwidth = bandwidths[-1]
    min_bandwidth, max_bandwidth = 2.0, 8.0
    squeeze = 0.0
    if narrowing:
        squeeze = _clamp((max_bandwidth - current_bandwidth) / (max_bandwidth - min_bandwidth) * 100.0)

    price = closes[-1]
    band = bands[-1]
    if squeeze > 50:
        if price > band.upper:
            return IndicatorSignal.buy(squeeze, bandwidth=current_bandwidth, price=price)
        if price < band.lower:
            return IndicatorSignal.sell(squeeze, bandwidth=current_bandwidth, price=price)
    return IndicatorSignal.neutral(bandwidth=current_bandwidth, price=price)


def volume_spike_signal(candles: Sequence[Candle], period: int = 20) -> IndicatorSignal:
    if period < 2 or len(candles) < period or not candles[0].volume:
        return IndicatorSignal.neutral()
    volumes = [candle.volume or 0.0 for candle in candles]
    average = sum(volumes[-period:-1]) / (period - 1)
    previous_price = candles[-2].close
    if average <= 0 or previous_price == 0:
        return IndicatorSignal.neutral()

    multiple = volumes[-1] / average
    spike_threshold, max_multiple = 2.0, 5.0
    if multiple > spike_threshold:
        strength = min(100.0, (multiple - spike_threshold) / (max_multiple - spike_threshold) * 100.0)
        price_change = (candles[-1].close - previous_price) / previous_price * 100.0
        if price_change > 0:
            return IndicatorSignal.buy(strength, volume_multiple=multiple, price_change=price_change)
        if price_change < 0:
            return IndicatorSignal.sell(strength, volume_multiple=multiple, price_change=price_change)
    return IndicatorSignal.neutral()


def adx_trend_signal(candles: Sequence[Candle], period: int = 14) -> IndicatorSignal:
    if len(candles) < period + 2:
        return IndicatorSignal.neutral()
    values = IndicatorSeries(candles).adx(period)
    if len(values) < 2:
        return IndicatorSignal.neutral()

    current, previous = values[-1], values[-2]
    di_total = current.plus_di + current.minus_di
    if di_total <= 0:
        return IndicatorSignal.neutral()

    # ADX 50 maps to full strength
    trend_strength = _clamp((current.adx - 15) * 2.85)
    spread = abs(current.plus_di - current.minus_di) / (di_total / 2.0) * 100.0
    spread_factor = min(1.0, spread / 20.0)
    rising = current.adx > previous.adx
    strength = min(100.0, trend_strength * spread_factor * (1.2 if rising else 1.0))

    if current.adx > 15:
        meta = {"adx": current.adx, "plus_di": current.plus_di, "minus_di": current.minus_di, "rising": rising}
        if current.plus_di > current.minus_di:
            return IndicatorSignal.buy(strength, **meta)
        if current.minus_di > current.plus_di:
            return IndicatorSignal.sell(strength, **meta)
    return IndicatorSignal.neutral()


def supertrend_signal(
    candles: Sequence[Candle], period: int = 10, multiplier: float = 3.0
) -> IndicatorSignal:
    if len(candles) < period + 2:
        return IndicatorSignal.neutral()
    series = IndicatorSeries(candles)
    atr_values = series.atr(period)
    if len(atr_values) < 2:
        return IndicatorSignal.neutral()

    highs, lows, closes = series.highs, series.lows, series.closes
    count = len(closes)
    upper = [0.0] * count
    lower = [0.0] * count
    trend = [0.0] * count
    for i in range(period, count):
        midpoint = (highs[i] + lows[i]) / 2.0
        basic_upper = midpoint + multiplier * atr_values[i - period]
        basic_lower = midpoint - multiplier * atr_values[i - period]
        if i == period:
            upper[i] = basic_upper
            lower[i] = basic_lower
            trend[i] = basic_upper if closes[i] <= basic_upper else basic_lower
            continue

        if basic_upper < upper[i - 1] or closes[i - 1] > upper[i - 1]:
            upper[i] = basic_upper
        else:
            upper[i] = upper[i - 1]
        if basic_lower > lower[i - 1] or closes[i - 1] < lower[i - 1]:
            lower[i] = basic_lower
        else:
            lower[i] = lower[i - 1]

        if trend[i - 1] == upper[i - 1]:
            trend[i] = upper[i] if closes[i] <= upper[i] else lower[i]
        elif trend[i - 1] == lower[i - 1]:
            trend[i] = lower[i] if closes[i] >= lower[i] else upper[i]
        else:
            trend[i] = upper[i] if closes[i] <= upper[i] else lower[i]

    current_close, previous_close = closes[-1], closes[-2]
    current_trend, previous_trend = trend[-1], trend[-2]
    if current_close == 0:
        return IndicatorSignal.neutral()

    distance = abs(current_close - current_trend) / current_close * 100.0
    distance_strength = min(100.0, distance / 3.0 * 100.0)

    if previous_close < previous_trend and current_close > current_trend:
        return IndicatorSignal.buy(80 + distance_strength * 0.2, supertrend=current_trend, crossed=True)
    if previous_close > previous_trend and current_close < current_trend:
        return IndicatorSignal.sell(80 + distance_strength * 0.2, supertrend=current_trend, crossed=True)
    if current_close > current_trend:
        return IndicatorSignal.buy(50 + distance_strength * 0.5, supertrend=current_trend, trend="above")
    if current_close < current_trend:
        return IndicatorSignal.sell(50 + distance_strength * 0.5, supertrend=current_trend, trend="below")
    return IndicatorSignal.neutral()


def heikin_ashi_signal(candles: Sequence[Candle]) -> IndicatorSignal:
    if len(candles) < 3:
        return IndicatorSignal.neutral()
    ha = heikin_ashi(candles)
    last, prev, prev2 = ha[-1], ha[-2], ha[-3]
    midpoint = (last.high + last.low) / 2.0
    if midpoint == 0:
        return IndicatorSignal.neutral()

    bullish = last.close > last.open
    bearish = last.close < last.open
    bullish_strengthening = bullish and (last.close - last.open) > (prev.close - prev.open) and prev.close > prev.open
    bearish_strengthening = bearish and (last.open - last.close) > (prev.open - prev.close) and prev.close < prev.open
    bullish_reversal = prev.close < prev.open and bullish and prev2.close < prev2.open
    bearish_reversal = prev.close > prev.open and bearish and prev2.close > prev2.open

    body_pct = abs(last.close - last.open) / midpoint * 100.0
    strength = 40 + min(100.0, body_pct * 10.0) * 0.6
    if bullish_strengthening or bearish_strengthening:
        strength += 10

    if bullish_reversal:
        return IndicatorSignal.buy(strength, body_pct=body_pct, reversal=True)
    if bearish_reversal:
        return IndicatorSignal.sell(strength, body_pct=body_pct, reversal=True)
    if bullish:
        return IndicatorSignal.buy(strength if bullish_strengthening else strength - 20, body_pct=body_pct)
    if bearish:
        return IndicatorSignal.sell(strength if bearish_strengthening else strength - 20, body_pct=body_pct)
    return IndicatorSignal.neutral()


_FIB_RATIOS = {
    "0": 0.0,
    "23.6": 0.236,
    "38.2": 0.382,
    "50": 0.5,
    "61.8": 0.618,
    "78.6": 0.786,
    "100": 1.0,
}
_FIB_KEY_LEVELS = ("38.2", "50", "61.8")


def fibonacci_retracement_signal(candles: Sequence[Candle], period: int = 50) -> IndicatorSignal:
    if period < 2 or len(candles) < period:
        return IndicatorSignal.neutral()
    recent = candles[-period:]
    highest_idx = max(range(period), key=lambda i: recent[i].high)
    lowest_idx = min(range(period), key=lambda i: recent[i].low)
    highest = recent[highest_idx].high
    lowest = recent[lowest_idx].low
    price_range = highest - lowest
    if price_range <= 0:
        return IndicatorSignal.neutral()

    levels = {name: lowest + price_range * ratio for name, ratio in _FIB_RATIOS.items()}
    uptrend = highest_idx > lowest_idx
    current = recent[-1]
    close = current.close
    previous_close = recent[-2].close
    tolerance = price_range * 0.005
    nearest = min(levels, key=lambda name: abs(close - levels[name]))
    near_key_level = any(abs(close - levels[name]) <= tolerance for name in _FIB_KEY_LEVELS)
    candle_range = current.high - current.low

    if uptrend and close < previous_close and near_key_level:
        bounce = (close - current.low) / candle_range * 100.0 if candle_range > 0 else 0.0
        return IndicatorSignal.buy(50 + bounce / 2, level=nearest, level_price=levels[nearest], uptrend=True)
    if not uptrend and close > previous_close and near_key_level:
        rejection = (current.high - close) / candle_range * 100.0 if candle_range > 0 else 0.0
        return IndicatorSignal.sell(50 + rejection / 2, level=nearest, level_price=levels[nearest], uptrend=False)

    if uptrend and close > levels["100"] and previous_close <= levels["100"]:
        return IndicatorSignal.buy(80, breakout=True, level="100")
    if not uptrend and close < levels["0"] and previous_close >= levels["0"]:
        return IndicatorSignal.sell(80, breakout=True, level="0")
    return IndicatorSignal.neutral()


def fractal_breakout_signal(candles: Sequence[Candle], lookback: int = 5) -> IndicatorSignal:
    count = len(candles)
    if lookback < 1 or count < lookback * 2 + 1:
        return IndicatorSignal.neutral()

    bearish_fractals: list[int] = []
    bullish_fractals: list[int] = []
    for i in range(lookback, count - lookback):
        neighbours = [j for j in range(i - lookback, i + lookback + 1) if j != i]
        if all(candles[j].high < candles[i].high for j in neighbours):
            bearish_fractals.append(i)
        if all(candles[j].low > candles[i].low for j in neighbours):
            bullish_fractals.append(i)

    current = candles[-1].close
    previous = candles[-2].close

    if bearish_fractals:
        level = candles[bearish_fractals[-1]].high
        if level > 0 and previous <= level < current:
            breakout_pct = (current - level) / level * 100.0
            return IndicatorSignal.buy(
                min(100.0, 60 + breakout_pct * 20), fractal_price=level, breakout_pct=breakout_pct
            )
    if bullish_fractals:
        level = candles[bullish_fractals[-1]].low
        if level > 0 and previous >= level > current:
            breakdown_pct = (level - current) / level * 100.0
            return IndicatorSignal.sell(
                min(100.0, 60 + breakdown_pct * 20), fractal_price=level, breakdown_pct=breakdown_pct
            )
    return IndicatorSignal.neutral()


def cci_signal(candles: Sequence[Candle], period: int = 20) -> IndicatorSignal:
    if len(candles) < period + 2:
        return IndicatorSignal.neutral()
    values = IndicatorSeries(candles).cci(period)
    if len(values) < 2:
        return IndicatorSignal.neutral()

    current, previous = values[-1], values[-2]
    cross_above_oversold = previous <= -100 and current > -100
    cross_below_overbought = previous >= 100 and current < 100
    overbought = current > 100
    oversold = current < -100
    bullish_trend = previous < 0 < current
    bearish_trend = previous > 0 > current

    strength = 0.0
    if overbought:
        strength = min(100.0, 50 + (current - 100) / 2)
    elif oversold:
        strength = min(100.0, 50 + abs(current + 100) / 2)
    elif bullish_trend or bearish_trend:
        strength = 60.0
    elif cross_above_oversold or cross_below_overbought:
        strength = 70.0

    if cross_above_oversold or (oversold and current > previous):
        return IndicatorSignal.buy(strength, cci=current, previous=previous)
    if cross_below_overbought or (overbought and current < previous):
        return IndicatorSignal.sell(strength, cci=current, previous=previous)
    if bullish_trend:
        return IndicatorSignal.buy(strength, cci=current, previous=previous, trend_change=True)
    if bearish_trend:
        return IndicatorSignal.sell(strength, cci=current, previous=previous, trend_change=True)
    return IndicatorSignal.neutral()


def stochastic_signal(candles: Sequence[Candle], k_period: int = 14, d_period: int = 3) -> IndicatorSignal:
    if len(candles) < k_period + d_period:
        return IndicatorSignal.neutral()
    points = IndicatorSeries(candles).stochastic(k_period, d_period)
    if len(points) < 2:
        return IndicatorSignal.neutral()

    current, previous = points[-1], points[-2]
    overbought = current.k > 80 and current.d > 80
    oversold = current.k < 20 and current.d < 20
    bullish_cross = previous.k <= previous.d and current.k > current.d
    bearish_cross = previous.k >= previous.d and current.k < current.d

    strength = 0.0
    if (oversold and bullish_cross) or (overbought and bearish_cross):
        strength = 90.0
    elif (oversold and current.k > previous.k) or (overbought and current.k < previous.k):
        strength = 70.0
    elif bullish_cross or bearish_cross:
        strength = 60.0

    if (oversold and (bullish_cross or current.k > previous.k)) or (bullish_cross and current.k < 50):
        return IndicatorSignal.buy(strength, k=current.k, d=current.d)
    if (overbought and (bearish_cross or current.k < previous.k)) or (bearish_cross and current.k > 50):
        return IndicatorSignal.sell(strength, k=current.k, d=current.d)
    return IndicatorSignal.neutral()


def williams_r_signal(candles: Sequence[Candle], period: int = 14) -> IndicatorSignal:
    if len(candles) < period + 2:
        return IndicatorSignal.neutral()
    values = IndicatorSeries(candles).williams_r(period)
    if len(values) < 2:
        return IndicatorSignal.neutral()

    current, previous = values[-1], values[-2]
    oversold = current < -80
    overbought = current > -20
    oversold_reversal = previous < -80 and current > previous and current > -80
    overbought_reversal = previous > -20 and current < previous and current < -20
    rising = current > previous
    falling = current < previous

    strength = 0.0
    if oversold_reversal:
        strength = 80 + min(20.0, current + 80)
    elif overbought_reversal:
        strength = 80 + min(20.0, -20 - current)
    elif oversold and rising:
        strength = 60 + min(20.0, (current + 100) * 0.5)
    elif overbought and falling:
        strength = 60 + min(20.0, -current * 0.5)

    if oversold_reversal or (oversold and rising):
        return IndicatorSignal.buy(strength, value=current, previous=previous)
    if overbought_reversal or (overbought and falling):
        return IndicatorSignal.sell(strength, value=current, previous=previous)
    return IndicatorSignal.neutral()


def parabolic_sar_signal(
    candles: Sequence[Candle], step: float = 0.02, max_step: float = 0.2
) -> IndicatorSignal:
    if len(candles) < 5:
        return IndicatorSignal.neutral()
    series = IndicatorSeries(candles)
    sar = series.parabolic_sar(step, max_step)
    current_sar, previous_sar = sar[-1], sar[-2]
    current_close, previous_close = series.closes[-1], series.closes[-2]
    if current_close == 0:
        return IndicatorSignal.neutral()

    distance = abs(current_close - current_sar) / current_close * 100.0
    distance_strength = min(100.0, distance / 3.0 * 100.0)

    if previous_close < previous_sar and current_close > current_sar:
        return IndicatorSignal.buy(80 + distance_strength * 0.2, sar=current_sar, reversal=True)
    if previous_close > previous_sar and current_close < current_sar:
        return IndicatorSignal.sell(80 + distance_strength * 0.2, sar=current_sar, reversal=True)
    if current_close > current_sar:
        return IndicatorSignal.buy(40 + distance_strength * 0.4, sar=current_sar, trend="up")
    if current_close < current_sar:
        return IndicatorSignal.sell(40 + distance_strength * 0.4, sar=current_sar, trend="down")
    return IndicatorSignal.neutral()


def vwap_signal(candles: Sequence[Candle], period: int = 14) -> IndicatorSignal:
    if period < 1 or len(candles) < max(period, 2) or not candles[0].volume:
        return IndicatorSignal.neutral()
    values = IndicatorSeries(candles).vwap(period)
    current_vwap, previous_vwap = values[-1], values[-2]
    if current_vwap <= 0:
        return IndicatorSignal.neutral()
    current_close = candles[-1].close
    previous_close = candles[-2].close

    distance = abs(current_close - current_vwap) / current_vwap * 100.0
    distance_strength = min(100.0, distance / 3.0 * 100.0)

    if previous_close < previous_vwap and current_close > current_vwap:
        return IndicatorSignal.buy(70 + distance_strength * 0.3, vwap=current_vwap, crossed=True)
    if previous_close > previous_vwap and current_close < current_vwap:
        return IndicatorSignal.sell(70 + distance_strength * 0.3, vwap=current_vwap, crossed=True)
    if current_close > current_vwap and current_close > previous_close:
        return IndicatorSignal.buy(40 + distance_strength * 0.3, vwap=current_vwap, position="above")
    if current_close < current_vwap and current_close < previous_close:
        return IndicatorSignal.sell(40 + distance_strength * 0.3, vwap=current_vwap, position="below")
    return IndicatorSignal.neutral()


def breakout_signal(candles: Sequence[Candle], period: int = 20) -> IndicatorSignal:
    if period < 1 or len(candles) < period + 5:
        return IndicatorSignal.neutral()
    window = candles[-period - 1 : -1]
    current = candles[-1]
    highest = max(candle.high for candle in window)
    lowest = min(candle.low for candle in window)
    if lowest <= 0:
        return IndicatorSignal.neutral()

    range_pct = (highest - lowest) / lowest * 100.0
    above = current.close > highest
    below = current.close < lowest
    if not (above or below):
        return IndicatorSignal.neutral()

    confirmed = False
    if current.volume:
        average_volume = sum(candle.volume or 0.0 for candle in window) / len(window)
        confirmed = current.volume > average_volume * 1.5

    range_strength = min(100.0, (range_pct - 2.0) / (10.0 - 2.0) * 100.0)
    if above:
        distance = (current.close - highest) / highest * 100.0
    else:
        distance = (lowest - current.close) / lowest * 100.0
    distance_strength = min(100.0, distance * 20.0)
    strength = 50 + range_strength * 0.25 + distance_strength * 0.25
    if confirmed:
        strength += 20
    strength = min(100.0, strength)

    meta = {"range_high": highest, "range_low": lowest, "volume_confirmed": confirmed, "range_pct": range_pct}
    if above:
        return IndicatorSignal.buy(strength, **meta)
    return IndicatorSignal.sell(strength, **meta)


def momentum_rsi_signal(
    candles: Sequence[Candle],
    period: int = 14,
    overbought: float = 70.0,
    oversold: float = 30.0,
    momentum_period: int = 10,
) -> IndicatorSignal:
    if len(candles) < max(period + 5, momentum_period + 1):
        return IndicatorSignal.neutral()
    closes = [candle.close for candle in candles]
    rsi_values = rsi(closes, period)
    if len(rsi_values) < 5:
        return IndicatorSignal.neutral()
    past_price = closes[-1 - momentum_period]
    if past_price == 0:
        return IndicatorSignal.neutral()

    current = rsi_values[-1]
    slope = current - rsi_values[-2]
    rate_of_change = (closes[-1] - past_price) / past_price * 100.0
    rising, falling = slope > 0, slope < 0
    positive, negative = rate_of_change > 0, rate_of_change < 0

    if current < oversold:
        strength = 60 + min(30.0, (oversold - current) * 1.5)
    elif current > overbought:
        strength = 60 + min(30.0, (current - overbought) * 1.5)
    else:
        strength = 40 + abs(slope) * 10
    if (rising and positive) or (falling and negative):
        strength += 10
    strength = min(100.0, strength)

    meta = {"rsi": current, "momentum": rate_of_change, "rsi_slope": slope}
    if current < oversold and rising:
        return IndicatorSignal.buy(strength, confirmed=positive, **meta)
    if current > overbought and falling:
        return IndicatorSignal.sell(strength, confirmed=negative, **meta)
    if rising and positive and current > 50:
        return IndicatorSignal.buy(strength * 0.7, confirmed=True, **meta)
    if falling and negative and current < 50:
        return IndicatorSignal.sell(strength * 0.7, confirmed=True, **meta)
    return IndicatorSignal.neutral()

import random
from dataclasses import replace

import pytest

from tradedash.strategy import DEFAULT_STRATEGIES, Candle, SignalDirection
from tradedash.strategy.indicators import IndicatorSeries, bollinger, ema, heikin_ashi, rsi, sma
from tradedash.strategy.signals import (
    ema_crossover_signal,
    mean_reversion_signal,
    volume_spike_signal,
    williams_r_signal,
)

BASE_TIME = 1_717_200_000_000
HOUR_MS = 3_600_000


def _candles(closes, spread=0.5, volume=100.0):
    return [
        Candle(
            time=BASE_TIME + index * HOUR_MS,
            open=close,
            high=close + spread,
            low=close - spread,
            close=close,
            volume=volume,
        )
        for index, close in enumerate(closes)
    ]


def _random_walk(seed, count, price=100.0):
    rng = random.Random(seed)
    candles = []
    for index in range(count):
        open_price = price
        price = max(1.0, price * (1 + rng.gauss(0, 0.015)))
        wick = abs(rng.gauss(0, 0.006)) * price
        candles.append(
            Candle(
                time=BASE_TIME + index * HOUR_MS,
                open=open_price,
                high=max(open_price, price) + wick,
                low=min(open_price, price) - wick,
                close=price,
                volume=rng.uniform(10, 300),
            )
        )
    return candles


def test_sma_and_seeded_ema():
    assert sma([1, 2, 3, 4], 2) == [1.5, 2.5, 3.5]
    assert ema([1, 2, 3, 4, 5], 3) == pytest.approx([2.0, 3.0, 4.0])
    assert sma([1, 2], 3) == []
    assert ema([], 3) == []


def test_rsi_extremes_and_length():
    rising = [float(value) for value in range(1, 31)]
    values = rsi(rising, 14)
    assert len(values) == len(rising) - 14
    assert all(value == 100.0 for value in values)
    assert rsi([5.0] * 20, 14)[-1] == 50.0
    assert rsi([1.0] * 10, 14) == []


def test_bollinger_collapses_on_flat_prices():
    band = bollinger([10.0] * 25, 20, 2.0)[-1]
    assert band.upper == band.middle == band.lower == 10.0
    assert band.bandwidth_pct == 0.0


def test_atr_and_williams_r_on_flat_range():
    series = IndicatorSeries(_candles([100.0] * 30, spread=1.0))
    atr = series.atr(14)
    assert len(atr) == 30 - 14
    assert atr[-1] == pytest.approx(2.0)

    flat = IndicatorSeries(_candles([100.0] * 20, spread=0.0))
    assert flat.williams_r(14)[-1] == -50.0
    assert flat.stochastic(14, 3)[-1].k == 50.0


def test_vwap_falls_back_to_typical_price_without_volume():
    series = IndicatorSeries(_candles([100.0, 102.0, 104.0], volume=0.0))
    assert series.vwap(14) == pytest.approx([100.0, 102.0, 104.0])


def test_heikin_ashi_first_candle():
    candle = Candle(time=BASE_TIME, open=10.0, high=14.0, low=8.0, close=12.0)
    first = heikin_ashi([candle])[0]
    assert first.open == pytest.approx(11.0)
    assert first.close == pytest.approx(11.0)
    assert first.high == 14.0
    assert first.low == 8.0


def test_indicator_series_values_do_not_depend_on_later_candles():
    candles = _random_walk(3, 120)
    prefix = candles[:70]
    full = IndicatorSeries(candles)
    partial = IndicatorSeries(prefix)

    closes = [candle.close for candle in candles]
    prefix_closes = closes[:70]
    assert ema(closes, 21)[: len(ema(prefix_closes, 21))] == pytest.approx(ema(prefix_closes, 21))
    assert rsi(closes, 14)[: len(rsi(prefix_closes, 14))] == pytest.approx(rsi(prefix_closes, 14))
    assert full.atr(14)[: len(partial.atr(14))] == pytest.approx(partial.atr(14))
    assert full.cci(20)[: len(partial.cci(20))] == pytest.approx(partial.cci(20))
    assert full.parabolic_sar(0.02, 0.2)[:70] == pytest.approx(partial.parabolic_sar(0.02, 0.2))
    assert full.vwap(14)[:70] == pytest.approx(partial.vwap(14))
    adx_full = [point.adx for point in full.adx(14)]
    adx_partial = [point.adx for point in partial.adx(14)]
    assert adx_full[: len(adx_partial)] == pytest.approx(adx_partial)


@pytest.mark.parametrize("name", list(DEFAULT_STRATEGIES))
def test_signals_do_not_depend_on_later_candles(name):
    strategy = DEFAULT_STRATEGIES[name]
    base = _random_walk(23, 90)
    future = [
        replace(candle, time=base[-1].time + (index + 1) * HOUR_MS)
        for index, candle in enumerate(_random_walk(41, 40, price=250.0))
    ]
    extended = [replace(candle) for candle in base] + future

    # a full pass over the longer series must leave no state behind
    strategy(extended)
    for index in (2, 20, 49, 50, 63, 89):
        expected = strategy(base[: index + 1])
        actual = strategy(extended[: index + 1])
        assert (actual.signal, actual.strength) == (expected.signal, expected.strength)


@pytest.mark.parametrize("name", list(DEFAULT_STRATEGIES))
def test_short_history_is_neutral(name):
    strategy = DEFAULT_STRATEGIES[name]
    for count in range(0, 3):
        signal = strategy(_candles([100.0 + i for i in range(count)]))
        assert signal.signal == SignalDirection.NEUTRAL
        assert signal.strength == 0.0


@pytest.mark.parametrize("name", list(DEFAULT_STRATEGIES))
def test_signals_are_bounded(name):
    strategy = DEFAULT_STRATEGIES[name]
    candles = _random_walk(17, 110)

    for end in range(1, 111, 7):
        signal = strategy(candles[:end])
        assert signal.signal in SignalDirection
        assert 0.0 <= signal.strength <= 100.0
        if signal.signal == SignalDirection.NEUTRAL:
            assert signal.strength == 0.0


@pytest.mark.parametrize("name", list(DEFAULT_STRATEGIES))
def test_flat_prices_do_not_raise(name):
    signal = DEFAULT_STRATEGIES[name](_candles([50.0] * 80, spread=0.0, volume=0.0))
    assert 0.0 <= signal.strength <= 100.0


def test_ema_crossover_fires_on_the_crossing_candle():
    closes = [200.0 - i for i in range(50)] + [151.0 + 3 * (i - 49) for i in range(50, 60)]
    candles = _candles(closes)

    assert ema_crossover_signal(candles[:56]).signal == SignalDirection.NEUTRAL
    signal = ema_crossover_signal(candles[:57])
    assert signal.signal == SignalDirection.BUY
    assert signal.strength == 100.0
    assert ema_crossover_signal(candles[:58]).signal == SignalDirection.NEUTRAL


def test_mean_reversion_buys_below_average_on_uptick():
    closes = [100.0] * 14 + [90.0, 91.0]
    signal = mean_reversion_signal(_candles(closes))

    assert signal.signal == SignalDirection.BUY
    assert signal.meta["sma"] == pytest.approx((100.0 * 12 + 90.0 + 91.0) / 14)
    assert 0 < signal.strength <= 100.0


def test_volume_spike_follows_price_direction():
    candles = _candles([100.0] * 25, volume=100.0)
    spike = Candle(time=candles[-1].time + HOUR_MS, open=100.0, high=103.0, low=99.5, close=102.0, volume=500.0)

    signal = volume_spike_signal(candles + [spike])

    assert signal.signal == SignalDirection.BUY
    assert signal.strength == pytest.approx(100.0)


def test_williams_r_reversal_from_oversold():
    closes = [100.0 - i for i in range(20)] + [95.0]
    signal = williams_r_signal(_candles(closes))

    assert signal.signal == SignalDirection.BUY
    assert signal.strength >= 80.0

import json
import math
from dataclasses import replace

import pytest

from tradedash.simulator import (
    ExitReason,
    PositionSide,
    Trade,
    best_performing_strategy,
    build_result,
    format_backtest_report,
    serialize_result,
    strategy_breakdown,
    timeframe_breakdown,
)
from tradedash.simulator.models import SkippedSeries


def _trade(profit_loss, strategy, exit_time):
    return Trade(
        symbol="ETHUSDT",
        timeframe="4h",
        entry_time=exit_time - 3_600_000,
        exit_time=exit_time,
        entry_price=2000.0,
        exit_price=2000.0 + profit_loss,
        side=PositionSide.LONG,
        size=1.0,
        profit_loss=profit_loss,
        profit_loss_percent=profit_loss / 20.0,
        strategy=strategy,
        signal_strength=40.0,
        exit_reason=ExitReason.TAKE_PROFIT,
    )


def test_report_for_empty_result_uses_placeholders():
    result = build_result([], 10000.0, [SkippedSeries("BTCUSDT", "1h", "too short")])

    report = format_backtest_report(result)

    assert report.startswith("=== BACKTEST RESULTS ===")
    assert "- Starting Balance: 10000.00" in report
    assert "- Number of Trades: 0" in report
    assert "- Strategy: N/A" in report
    assert "- Best Strategy: None" in report
    assert "- BTCUSDT 1h: too short" in report


def test_report_lists_best_and_worst_trade():
    trades = [_trade(50.0, "Supertrend", 1_717_200_000_000), _trade(-20.0, "CCI", 1_717_203_600_000)]

    report = format_backtest_report(build_result(trades, 10000.0))

    assert "- Total Profit: 30.00 (0.30%)" in report
    assert "- Profit: 50.00 (2.50%)" in report
    assert "- Loss: -20.00 (-1.00%)" in report
    assert "at 2024-06-01T00:00:00.000Z" in report
    assert "(take_profit)" in report


def test_best_strategy_requires_minimum_trade_count():
    trades = [_trade(10.0, "Supertrend", index) for index in range(5)]
    trades += [_trade(500.0, "CCI", 10 + index) for index in range(4)]

    assert best_performing_strategy(trades) == "Supertrend"
    assert best_performing_strategy(trades, min_trades=4) == "CCI"
    assert best_performing_strategy([]) == "None"


def test_serialized_result_is_json_ready():
    result = build_result([_trade(50.0, "Supertrend", 5)], 1000.0)

    payload = serialize_result(result)
    decoded = json.loads(json.dumps(payload))

    assert decoded["stats"]["profit_factor"] == "inf"
    assert decoded["trades"][0]["side"] == "long"
    assert decoded["best_trade"]["exit_reason"] == "take_profit"
    assert decoded["equity_curve"] == [1000.0, 1050.0]


def test_strategy_breakdown_orders_by_profit_factor_then_win_rate():
    trades = [
        _trade(40.0, "Supertrend", 1),
        _trade(-20.0, "Supertrend", 2),
        _trade(10.0, "CCI", 3),
        _trade(30.0, "VWAP", 4),
        _trade(-10.0, "VWAP", 5),
        _trade(-10.0, "VWAP", 6),
    ]

    rows = strategy_breakdown(trades)

    assert [row.name for row in rows] == ["CCI", "Supertrend", "VWAP"]
    assert math.isinf(rows[0].profit_factor)
    assert rows[1].profit_factor == pytest.approx(2.0)
    assert rows[1].win_rate == pytest.approx(50.0)
    assert rows[2].trades == 3
    assert rows[2].total_profit == pytest.approx(10.0)
    assert strategy_breakdown([]) == []


def test_timeframe_breakdown_groups_by_timeframe():
    trades = [
        _trade(10.0, "CCI", 1),
        replace(_trade(-5.0, "CCI", 2), timeframe="1h"),
        replace(_trade(20.0, "CCI", 3), timeframe="1h"),
    ]

    rows = timeframe_breakdown(trades)

    assert [row.name for row in rows] == ["4h", "1h"]
    assert rows[1].profit_factor == pytest.approx(4.0)

    result = build_result(trades, 1000.0)
    report = format_backtest_report(result)
    assert "Timeframe Breakdown:" in report
    assert "- 1h: 2 trades, win rate 50.00%, profit factor 4.00, P/L 15.00" in report
    assert "- Sortino Ratio:" in report
    assert "- Calmar Ratio:" in report

    payload = json.loads(json.dumps(serialize_result(result)))
    assert payload["timeframe_breakdown"][0]["profit_factor"] == "inf"
    assert payload["strategy_breakdown"][0]["trades"] == 3

import math

import pytest

from tradedash.simulator import (
    ExitReason,
    PositionSide,
    Trade,
    calculate_backtest_stats,
    calmar_ratio,
    sharpe_ratio,
    sortino_ratio,
)


def _trade(profit_loss, profit_loss_percent=None, strategy="EMA Crossover", exit_time=0):
    if profit_loss_percent is None:
        profit_loss_percent = profit_loss / 100.0
    return Trade(
        symbol="BTCUSDT",
        timeframe="1h",
        entry_time=exit_time - 1,
        exit_time=exit_time,
        entry_price=100.0,
        exit_price=100.0 + profit_loss_percent,
        side=PositionSide.LONG,
        size=1.0,
        profit_loss=profit_loss,
        profit_loss_percent=profit_loss_percent,
        strategy=strategy,
        signal_strength=50.0,
        exit_reason=ExitReason.SIGNAL,
    )


def test_zero_trades_gives_populated_zero_stats():
    stats = calculate_backtest_stats([], 5000.0, 0.0)

    assert stats.starting_balance == 5000.0
    assert stats.ending_balance == 5000.0
    assert stats.num_trades == 0
    assert stats.win_rate == 0.0
    assert stats.profit_factor == 0.0
    assert stats.sharpe_ratio == 0.0
    assert stats.risk_reward_ratio == 0.0
    assert stats.max_drawdown_percent == 0.0


def test_break_even_trades_count_as_losses():
    stats = calculate_backtest_stats([_trade(200.0), _trade(-100.0), _trade(0.0)], 10000.0, 1.0)

    assert stats.num_trades == 3
    assert stats.winning_trades == 1
    assert stats.losing_trades == 2
    assert stats.win_rate == pytest.approx(100.0 / 3)
    assert stats.total_profit == pytest.approx(100.0)
    assert stats.ending_balance == pytest.approx(10100.0)
    assert stats.profit_percent == pytest.approx(1.0)
    assert stats.average_profit == pytest.approx(200.0)
    assert stats.average_loss == pytest.approx(50.0)
    assert stats.profit_factor == pytest.approx(2.0)
    assert stats.risk_reward_ratio == pytest.approx(4.0)
    assert stats.max_drawdown == 1.0


def test_only_winners_gives_infinite_profit_factor():
    stats = calculate_backtest_stats([_trade(10.0), _trade(30.0)], 1000.0, 0.0)

    assert math.isinf(stats.profit_factor)
    assert stats.average_loss == 0.0
    assert stats.risk_reward_ratio == 0.0


def test_only_break_even_trades_gives_zero_profit_factor():
    stats = calculate_backtest_stats([_trade(0.0), _trade(0.0)], 1000.0, 0.0)

    assert stats.profit_factor == 0.0
    assert stats.win_rate == 0.0


def test_sharpe_ratio_uses_population_deviation():
    assert sharpe_ratio([0.02, 0.04]) == pytest.approx(3.0 * math.sqrt(252))
    assert sharpe_ratio([0.01, -0.01]) == 0.0
    assert sharpe_ratio([0.5, 0.5, 0.5]) == 0.0
    assert sharpe_ratio([]) == 0.0


def test_sharpe_ratio_reads_trade_percent_returns():
    trades = [_trade(20.0, profit_loss_percent=2.0), _trade(40.0, profit_loss_percent=4.0)]

    stats = calculate_backtest_stats(trades, 1000.0, 0.0)

    assert stats.sharpe_ratio == pytest.approx(3.0 * math.sqrt(252))


def test_sortino_ratio_uses_losing_returns_only():
    assert sortino_ratio([0.02, 0.04, -0.03]) == pytest.approx(0.01 / 0.03 * math.sqrt(252))
    assert sortino_ratio([0.02, 0.04]) == 0.0
    assert sortino_ratio([]) == 0.0


def test_calmar_ratio_divides_return_by_drawdown():
    assert calmar_ratio(12.0, 4.0) == 3.0
    assert calmar_ratio(12.0, 0.0) == 0.0

    trades = [
        _trade(300.0, profit_loss_percent=3.0),
        _trade(-100.0, profit_loss_percent=-1.0),
    ]
    stats = calculate_backtest_stats(trades, 10000.0, 0.5)

    assert stats.calmar_ratio == pytest.approx(2.0 / 0.5)
    assert stats.sortino_ratio == pytest.approx(0.01 / 0.01 * math.sqrt(252))
    assert calculate_backtest_stats([], 10000.0, 0.0).sortino_ratio == 0.0

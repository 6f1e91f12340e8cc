"""Performance statistics over completed trades."""

from __future__ import annotations

import math
from typing import Sequence

from tradedash.simulator.models import BacktestStats, Trade

TRADING_DAYS_PER_YEAR = 252


def empty_stats(initial_balance: float, max_drawdown: float = 0.0) -> BacktestStats:
    return BacktestStats(
        starting_balance=initial_balance,
        ending_balance=initial_balance,
        total_profit=0.0,
        profit_percent=0.0,
        num_trades=0,
        winning_trades=0,
        losing_trades=0,
        win_rate=0.0,
        average_profit=0.0,
        average_loss=0.0,
        profit_factor=0.0,
        max_drawdown=max_drawdown,
        max_drawdown_percent=max_drawdown,
        sharpe_ratio=0.0,
        risk_reward_ratio=0.0,
        sortino_ratio=0.0,
        calmar_ratio=0.0,
    )


def sharpe_ratio(returns: Sequence[float]) -> float:
    """Annualised mean/stddev of per-trade returns, 0 when flat."""
    if not returns:
        return 0.0
    mean = sum(returns) / len(returns)
    variance = sum((value - mean) ** 2 for value in returns) / len(returns)
    deviation = math.sqrt(variance)
    if deviation < 1e-12:
        return 0.0
    return mean / deviation * math.sqrt(TRADING_DAYS_PER_YEAR)


def sortino_ratio(returns: Sequence[float]) -> float:
    """Annualised mean over downside deviation, 0 without losing returns."""
    losses = [value for value in returns if value < 0]
    if not losses:
        return 0.0
    downside = math.sqrt(sum(value * value for value in losses) / len(losses))
    if downside < 1e-12:
        return 0.0
    mean = sum(returns) / len(returns)
    return mean / downside * math.sqrt(TRADING_DAYS_PER_YEAR)


def calmar_ratio(profit_percent: float, max_drawdown_percent: float) -> float:
    if max_drawdown_percent <= 0:
        return 0.0
    return profit_percent / max_drawdown_percent


def calculate_backtest_stats(
    trades: Sequence[Trade],
    initial_balance: float,
    max_drawdown: float,
) -> BacktestStats:
    """Aggregate trade results.

    ``max_drawdown`` is the peak-relative drawdown percentage tracked while the
    equity curve was built. A profit factor with wins and no losses is
    ``math.inf``. Break-even trades count as losses.
    """
    if not trades:
        return empty_stats(initial_balance, max_drawdown)

    total_profit = sum(trade.profit_loss for trade in trades)
    ending_balance = initial_balance + total_profit
    winners = [trade for trade in trades if trade.profit_loss > 0]
    losers = [trade for trade in trades if trade.profit_loss <= 0]

    total_wins = sum(trade.profit_loss for trade in winners)
    total_losses = abs(sum(trade.profit_loss for trade in losers))
    average_profit = total_wins / len(winners) if winners else 0.0
    average_loss = total_losses / len(losers) if losers else 0.0

    if total_losses > 0:
        profit_factor = total_wins / total_losses
    elif total_wins > 0:
        profit_factor = math.inf
    else:
        profit_factor = 0.0

    returns = [trade.profit_loss_percent / 100.0 for trade in trades]
    profit_percent = total_profit / initial_balance * 100.0
    return BacktestStats(
        starting_balance=initial_balance,
        ending_balance=ending_balance,
        total_profit=total_profit,
        profit_percent=profit_percent,
        num_trades=len(trades),
        winning_trades=len(winners),
        losing_trades=len(losers),
        win_rate=len(winners) / len(trades) * 100.0,
        average_profit=average_profit,
        average_loss=average_loss,
        profit_factor=profit_factor,
        max_drawdown=max_drawdown,
        max_drawdown_percent=max_drawdown,
        sharpe_ratio=sharpe_ratio(returns),
        risk_reward_ratio=average_profit / average_loss if average_loss > 0 else 0.0,
        sortino_ratio=sortino_ratio(returns),
        calmar_ratio=calmar_ratio(profit_percent, max_drawdown),
    )

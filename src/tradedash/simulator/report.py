"""Text and JSON renderings of backtest results."""

from __future__ import annotations

import math
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional

from tradedash.simulator.models import BacktestResult, PerformanceBreakdown, Trade


def _iso(epoch_ms: int) -> str:
    stamp = datetime.fromtimestamp(epoch_ms / 1000.0, tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _trade_lines(label: str, amount_label: str, trade: Optional[Trade]) -> list[str]:
    if trade is None:
        return [
            f"{label}:",
            "- Strategy: N/A",
            "- Side: N/A",
            f"- {amount_label}: N/A (N/A%)",
            "- Entry: N/A",
            "- Exit: N/A",
        ]
    return [
        f"{label}:",
        f"- Strategy: {trade.strategy or 'N/A'}",
        f"- Side: {trade.side.value}",
        f"- {amount_label}: {trade.profit_loss:.2f} ({trade.profit_loss_percent:.2f}%)",
        f"- Entry: {trade.entry_price:.2f} at {_iso(trade.entry_time)}",
        f"- Exit: {trade.exit_price:.2f} at {_iso(trade.exit_time)} ({trade.exit_reason.value})",
    ]


def format_backtest_report(result: BacktestResult) -> str:
    stats = result.stats
    lines = [
        "=== BACKTEST RESULTS ===",
        "",
        "Summary:",
        f"- Starting Balance: {stats.starting_balance:.2f}",
        f"- Ending Balance: {stats.ending_balance:.2f}",
        f"- Total Profit: {stats.total_profit:.2f} ({stats.profit_percent:.2f}%)",
        f"- Number of Trades: {stats.num_trades}",
        "",
        "Performance:",
        f"- Win Rate: {stats.win_rate:.2f}%",
        f"- Profit Factor: {stats.profit_factor:.2f}",
        f"- Average Profit: {stats.average_profit:.2f}",
        f"- Average Loss: {stats.average_loss:.2f}",
        f"- Risk-Reward Ratio: {stats.risk_reward_ratio:.2f}",
        f"- Sharpe Ratio: {stats.sharpe_ratio:.2f}",
        f"- Sortino Ratio: {stats.sortino_ratio:.2f}",
        f"- Calmar Ratio: {stats.calmar_ratio:.2f}",
        f"- Max Drawdown: {stats.max_drawdown_percent:.2f}%",
        f"- Best Strategy: {best_performing_strategy(result.trades)}",
        "",
    ]
    lines += _trade_lines("Best Trade", "Profit", result.best_trade)
    lines.append("")
    lines += _trade_lines("Worst Trade", "Loss", result.worst_trade)
    for title, breakdown in (
        ("Strategy Breakdown", strategy_breakdown(result.trades)),
        ("Timeframe Breakdown", timeframe_breakdown(result.trades)),
    ):
        if breakdown:
            lines += ["", f"{title}:"]
            lines += [_breakdown_line(item) for item in breakdown]
    if result.skipped_series:
        lines += ["", "Skipped Series:"]
        lines += [f"- {item.symbol} {item.timeframe}: {item.reason}" for item in result.skipped_series]
    return "\n".join(lines) + "\n"


def best_performing_strategy(trades: Iterable[Trade], min_trades: int = 5) -> str:
    """Strategy with the highest total P/L among those with ``min_trades`` trades."""
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    for trade in trades:
        totals[trade.strategy] = totals.get(trade.strategy, 0.0) + trade.profit_loss
        counts[trade.strategy] = counts.get(trade.strategy, 0) + 1

    best_name = ""
    best_profit = -math.inf
    for name, total in totals.items():
        if counts[name] >= min_trades and total > best_profit:
            best_name = name
            best_profit = total
    return best_name or "None"


def _breakdown(trades: Iterable[Trade], key: Callable[[Trade], str]) -> list[PerformanceBreakdown]:
    groups: dict[str, list[Trade]] = {}
    for trade in trades:
        groups.setdefault(key(trade), []).append(trade)

    rows = []
    for name, group in groups.items():
        wins = sum(trade.profit_loss for trade in group if trade.profit_loss > 0)
        losses = abs(sum(trade.profit_loss for trade in group if trade.profit_loss <= 0))
        if losses > 0:
            profit_factor = wins / losses
        elif wins > 0:
            profit_factor = math.inf
        else:
            profit_factor = 0.0
        winners = sum(1 for trade in group if trade.profit_loss > 0)
        rows.append(
            PerformanceBreakdown(
                name=name,
                trades=len(group),
                win_rate=winners / len(group) * 100.0,
                profit_factor=profit_factor,
                total_profit=sum(trade.profit_loss for trade in group),
            )
        )
    # stable: first-seen order survives full ties
    rows.sort(key=lambda row: (row.profit_factor, row.win_rate), reverse=True)
    return rows


def strategy_breakdown(trades: Iterable[Trade]) -> list[PerformanceBreakdown]:
    """Per-strategy results, best profit factor first, then best win rate."""
    return _breakdown(trades, lambda trade: trade.strategy)


def timeframe_breakdown(trades: Iterable[Trade]) -> list[PerformanceBreakdown]:
    return _breakdown(trades, lambda trade: trade.timeframe)


def _breakdown_line(item: PerformanceBreakdown) -> str:
    return (
        f"- {item.name or 'N/A'}: {item.trades} trades, win rate {item.win_rate:.2f}%, "
        f"profit factor {item.profit_factor:.2f}, P/L {item.total_profit:.2f}"
    )


def _breakdown_payload(rows: list[PerformanceBreakdown]) -> list[dict[str, Any]]:
    payload = []
    for row in rows:
        item = asdict(row)
        item["profit_factor"] = _finite(row.profit_factor)
        payload.append(item)
    return payload


def _trade_payload(trade: Optional[Trade]) -> Optional[dict[str, Any]]:
    if trade is None:
        return None
    payload = asdict(trade)
    payload["side"] = trade.side.value
    payload["exit_reason"] = trade.exit_reason.value
    return payload


def _finite(value: float) -> Any:
    # JSON has no infinity literal
    return value if math.isfinite(value) else "inf"


def serialize_result(result: BacktestResult) -> dict[str, Any]:
    stats = asdict(result.stats)
    stats["profit_factor"] = _finite(result.stats.profit_factor)
    return {
        "stats": stats,
        "trades": [_trade_payload(trade) for trade in result.trades],
        "equity_curve": list(result.equity_curve),
        "drawdowns": list(result.drawdowns),
        "best_trade": _trade_payload(result.best_trade),
        "worst_trade": _trade_payload(result.worst_trade),
        "best_strategy": best_performing_strategy(result.trades),
        "strategy_breakdown": _breakdown_payload(strategy_breakdown(result.trades)),
        "timeframe_breakdown": _breakdown_payload(timeframe_breakdown(result.trades)),
        "skipped_series": [asdict(item) for item in result.skipped_series],
    }

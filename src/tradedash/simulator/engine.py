"""Candle-replay backtest engine."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional, Sequence

from tradedash.errors import BacktestCancelledError, InsufficientDataError
from tradedash.monitoring.audit import AuditLog
from tradedash.simulator.candles import filter_time_range, validate_series
from tradedash.simulator.models import (
    BacktestOptions,
    BacktestResult,
    ExitReason,
    PositionSide,
    SkippedSeries,
    Trade,
)
from tradedash.simulator.stats import calculate_backtest_stats
from tradedash.strategy.combiner import combine_signals, strongest_strategy
from tradedash.strategy.market_data import Candle
from tradedash.strategy.models import CombinedSignal, CombinerConfig, IndicatorSignal, SignalDirection
from tradedash.strategy.registry import IndicatorFn, resolve_strategies

log = logging.getLogger(__name__)

WARMUP_CANDLES = 50

ProgressCallback = Callable[[str, str, int, int], None]


@dataclass
class _OpenPosition:
    side: PositionSide
    size: float
    entry_time: int
    entry_price: float
    strategy: str
    signal_strength: float


def equity_and_drawdowns(
    trades: Iterable[Trade], initial_balance: float
) -> tuple[list[float], list[float], float]:
    """Balance after each trade and its percent drawdown from the running peak."""
    balance = initial_balance
    peak = initial_balance
    equity_curve = [balance]
    drawdowns = [0.0]
    max_drawdown = 0.0
    for trade in trades:
        balance += trade.profit_loss
        if balance > peak:
            peak = balance
            drawdown = 0.0
        else:
            drawdown = max(0.0, (peak - balance) / peak * 100.0)
        max_drawdown = max(max_drawdown, drawdown)
        equity_curve.append(balance)
        drawdowns.append(drawdown)
    return equity_curve, drawdowns, max_drawdown


def build_result(
    trades: Iterable[Trade],
    initial_balance: float,
    skipped_series: Sequence[SkippedSeries] = (),
) -> BacktestResult:
    """Merge per-series trades by exit time and derive curves and statistics."""
    ordered = sorted(trades, key=lambda trade: trade.exit_time)
    equity_curve, drawdowns, max_drawdown = equity_and_drawdowns(ordered, initial_balance)
    stats = calculate_backtest_stats(ordered, initial_balance, max_drawdown)
    best_trade = max(ordered, key=lambda trade: trade.profit_loss_percent, default=None)
    # equal losses resolve to the latest exit
    worst_trade = min(reversed(ordered), key=lambda trade: trade.profit_loss_percent, default=None)
    return BacktestResult(
        trades=ordered,
        stats=stats,
        equity_curve=equity_curve,
        drawdowns=drawdowns,
        best_trade=best_trade,
        worst_trade=worst_trade,
        skipped_series=list(skipped_series),
    )


class BacktestEngine:
    """Replays candle series through the enabled strategies.

    Each (symbol, timeframe) series owns one position slot and its own running
    balance; series never share state, so :meth:`simulate_series` may be fanned
    out over threads and merged with :func:`build_result`.
    """

    def __init__(
        self,
        options: BacktestOptions,
        strategies: Optional[Mapping[str, IndicatorFn]] = None,
        combiner: Optional[CombinerConfig] = None,
        audit: Optional[AuditLog] = None,
    ) -> None:
        self.options = options
        self.strategies = resolve_strategies(options.strategies, strategies)
        self.combiner = combiner or CombinerConfig()
        self.audit = audit

    def prepare_series(self, symbol: str, timeframe: str, candles: Sequence[Candle]) -> list[Candle]:
        validate_series(candles, f"{symbol} {timeframe}")
        filtered = filter_time_range(candles, self.options.start_time, self.options.end_time)
        if len(filtered) < WARMUP_CANDLES:
            raise InsufficientDataError(symbol, timeframe, len(filtered), WARMUP_CANDLES)
        return filtered

    def evaluate(self, history: Sequence[Candle]) -> tuple[dict[str, IndicatorSignal], CombinedSignal]:
        signals = {name: indicator(history) for name, indicator in self.strategies.items()}
        return signals, combine_signals(signals, self.combiner)

    def simulate_series(
        self,
        symbol: str,
        timeframe: str,
        candles: Sequence[Candle],
        cancel: Optional[threading.Event] = None,
    ) -> list[Trade]:
        series = self.prepare_series(symbol, timeframe, candles)
        balance = self.options.initial_balance
        position: Optional[_OpenPosition] = None
        trades: list[Trade] = []

        for index in range(WARMUP_CANDLES, len(series)):
            if cancel is not None and cancel.is_set():
                raise BacktestCancelledError(f"Cancelled while simulating {symbol} {timeframe}")
            candle = series[index]
            signals, combined = self.evaluate(series[: index + 1])

            if position is None:
                if combined.signal != SignalDirection.NEUTRAL:
                    position = self._open_position(symbol, timeframe, candle, signals, combined, balance)
                continue

            reason = self._exit_reason(position, candle, combined)
            if reason is None:
                continue
            trade = self._close_position(symbol, timeframe, position, candle, reason)
            balance += trade.profit_loss
            trades.append(trade)
            position = None

        if position is not None:
            log.debug(
                "%s %s: discarding %s position opened at %s",
                symbol,
                timeframe,
                position.side.value,
                position.entry_time,
            )
        return trades

    def run(
        self,
        candles: Mapping[str, Mapping[str, Sequence[Candle]]],
        progress: Optional[ProgressCallback] = None,
        cancel: Optional[threading.Event] = None,
    ) -> BacktestResult:
        options = self.options
        jobs: list[tuple[str, str]] = []
        skipped: list[SkippedSeries] = []
        for symbol in options.symbols:
            for timeframe in options.timeframes:
                if timeframe in candles.get(symbol, {}):
                    jobs.append((symbol, timeframe))
                else:
                    log.warning("No candles supplied for %s %s", symbol, timeframe)
                    skipped.append(SkippedSeries(symbol, timeframe, "no candles supplied"))

        log.info(
            "Backtest started: %d series, %d strategies, balance %.2f",
            len(jobs),
            len(self.strategies),
            options.initial_balance,
        )
        trades: list[Trade] = []
        for done, (symbol, timeframe) in enumerate(jobs, start=1):
            try:
                trades.extend(self.simulate_series(symbol, timeframe, candles[symbol][timeframe], cancel))
            except InsufficientDataError as exc:
                log.warning("Skipping %s %s: %s", symbol, timeframe, exc)
                skipped.append(SkippedSeries(symbol, timeframe, str(exc)))
                self._audit("series_skipped", {"symbol": symbol, "timeframe": timeframe, "reason": str(exc)})
            if progress is not None:
                progress(symbol, timeframe, done, len(jobs))

        result = build_result(trades, options.initial_balance, skipped)
        log.info(
            "Backtest finished: %d trades, ending balance %.2f",
            result.stats.num_trades,
            result.stats.ending_balance,
        )
        self._audit(
            "backtest_completed",
            {
                "num_trades": result.stats.num_trades,
                "ending_balance": result.stats.ending_balance,
                "max_drawdown_percent": result.stats.max_drawdown_percent,
                "skipped_series": len(result.skipped_series),
            },
        )
        return result

    def _open_position(
        self,
        symbol: str,
        timeframe: str,
        candle: Candle,
        signals: Mapping[str, IndicatorSignal],
        combined: CombinedSignal,
        balance: float,
    ) -> Optional[_OpenPosition]:
        if balance <= 0:
            log.debug("%s %s: balance exhausted, ignoring %s signal", symbol, timeframe, combined.signal.value)
            return None
        side = PositionSide.LONG if combined.signal == SignalDirection.BUY else PositionSide.SHORT
        size = balance * (self.options.risk_per_trade / 100.0) / candle.close
        position = _OpenPosition(
            side=side,
            size=size,
            entry_time=candle.time,
            entry_price=candle.close,
            strategy=strongest_strategy(signals, combined.signal),
            signal_strength=combined.strength,
        )
        log.debug(
            "%s %s: opened %s at %.6f size %.8f (%s)",
            symbol,
            timeframe,
            side.value,
            candle.close,
            size,
            position.strategy,
        )
        self._audit(
            "position_opened",
            {
                "symbol": symbol,
                "timeframe": timeframe,
                "side": side.value,
                "time": candle.time,
                "price": candle.close,
                "size": size,
                "strategy": position.strategy,
                "signal_strength": combined.strength,
            },
        )
        return position

    def _exit_reason(
        self, position: _OpenPosition, candle: Candle, combined: CombinedSignal
    ) -> Optional[ExitReason]:
        options = self.options
        long = position.side == PositionSide.LONG
        if (long and combined.signal == SignalDirection.SELL) or (
            not long and combined.signal == SignalDirection.BUY
        ):
            return ExitReason.SIGNAL

        if options.use_stop_loss:
            offset = options.stop_loss_percent / 100.0
            if long and candle.low < position.entry_price * (1 - offset):
                return ExitReason.STOP_LOSS
            if not long and candle.high > position.entry_price * (1 + offset):
                return ExitReason.STOP_LOSS

        if options.use_take_profit:
            offset = options.take_profit_percent / 100.0
            if long and candle.high > position.entry_price * (1 + offset):
                return ExitReason.TAKE_PROFIT
            if not long and candle.low < position.entry_price * (1 - offset):
                return ExitReason.TAKE_PROFIT
        return None

    def _close_position(
        self,
        symbol: str,
        timeframe: str,
        position: _OpenPosition,
        candle: Candle,
        reason: ExitReason,
    ) -> Trade:
        exit_price = candle.close
        if position.side == PositionSide.LONG:
            profit_loss = (exit_price - position.entry_price) * position.size
            profit_loss_percent = (exit_price / position.entry_price - 1.0) * 100.0
        else:
            profit_loss = (position.entry_price - exit_price) * position.size
            profit_loss_percent = (1.0 - exit_price / position.entry_price) * 100.0

        trade = Trade(
            symbol=symbol,
            timeframe=timeframe,
            entry_time=position.entry_time,
            exit_time=candle.time,
            entry_price=position.entry_price,
            exit_price=exit_price,
            side=position.side,
            size=position.size,
            profit_loss=profit_loss,
            profit_loss_percent=profit_loss_percent,
            strategy=position.strategy,
            signal_strength=position.signal_strength,
            exit_reason=reason,
        )
        log.debug(
            "%s %s: closed %s at %.6f, P/L %.2f (%.2f%%), reason %s",
            symbol,
            timeframe,
            position.side.value,
            exit_price,
            profit_loss,
            profit_loss_percent,
            reason.value,
        )
        self._audit(
            "position_closed",
            {
                "symbol": symbol,
                "timeframe": timeframe,
                "side": position.side.value,
                "entry_time": position.entry_time,
                "exit_time": candle.time,
                "exit_price": exit_price,
                "profit_loss": profit_loss,
                "exit_reason": reason.value,
            },
        )
        return trade

    def _audit(self, event: str, payload: dict) -> None:
        if self.audit is not None:
            self.audit.log(event, payload)


def run_backtest(
    candles: Mapping[str, Mapping[str, Sequence[Candle]]],
    options: BacktestOptions,
    *,
    strategies: Optional[Mapping[str, IndicatorFn]] = None,
    combiner: Optional[CombinerConfig] = None,
    audit: Optional[AuditLog] = None,
    progress: Optional[ProgressCallback] = None,
    cancel: Optional[threading.Event] = None,
) -> BacktestResult:
    engine = BacktestEngine(options, strategies=strategies, combiner=combiner, audit=audit)
    return engine.run(candles, progress=progress, cancel=cancel)

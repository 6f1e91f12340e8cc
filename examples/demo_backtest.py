import logging
import random
from datetime import datetime, timezone

from tradedash.simulator import BacktestOptions, format_backtest_report, run_backtest
from tradedash.strategy import Candle, CombinerConfig


logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

HOUR_MS = 3_600_000
start = int(datetime(2024, 6, 1, tzinfo=timezone.utc).timestamp() * 1000)


def random_walk(seed: int, count: int, price: float) -> list[Candle]:
    rng = random.Random(seed)
    candles = []
    for index in range(count):
        open_price = price
        price = max(1.0, price * (1 + rng.gauss(0.0003, 0.01)))
        spread = abs(rng.gauss(0, 0.004)) * price
        candles.append(
            Candle(
                time=start + index * HOUR_MS,
                open=open_price,
                high=max(open_price, price) + spread,
                low=max(0.5, min(open_price, price) - spread),
                close=price,
                volume=rng.uniform(50, 150),
            )
        )
    return candles


candles = {
    "BTCUSDT": {"1h": random_walk(7, 400, 60000.0)},
    "ETHUSDT": {"1h": random_walk(11, 400, 3000.0)},
}

options = BacktestOptions(
    initial_balance=10000,
    risk_per_trade=1.0,
    symbols=["BTCUSDT", "ETHUSDT"],
    timeframes=["1h"],
    strategies=["EMA Crossover", "Supertrend", "ADX Trend", "Momentum RSI"],
    use_stop_loss=True,
    use_take_profit=True,
)

result = run_backtest(candles, options, combiner=CombinerConfig(min_strength=5.0))
print(format_backtest_report(result))
print("Equity points:", len(result.equity_curve))

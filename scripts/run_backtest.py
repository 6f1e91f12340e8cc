from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from tradedash.config import compute_config_hash, load_config, make_run_id
from tradedash.errors import BacktestError
from tradedash.monitoring import AuditLog
from tradedash.simulator import format_backtest_report, load_candles, run_backtest, serialize_result


def _progress(symbol: str, timeframe: str, done: int, total: int) -> None:
    print(f"[{done}/{total}] {symbol} {timeframe}", file=sys.stderr)


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", required=True)
    parser.add_argument("--candles", required=True, help="JSON or CSV candle file")
    parser.add_argument("--output", help="write the serialized result as JSON")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    try:
        config = load_config(config_path)
        candles = load_candles(args.candles)
    except BacktestError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    config_hash = compute_config_hash(config_path)
    audit = AuditLog(
        Path(config.monitoring.audit_log_path),
        run_id=make_run_id(config, config_hash),
        config_hash=config_hash,
    )
    audit.log("run_start", {"config": str(config_path), "candles": args.candles})

    result = run_backtest(
        candles,
        config.backtest,
        combiner=config.combiner,
        audit=audit,
        progress=_progress,
    )
    print(format_backtest_report(result))

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(serialize_result(result), indent=2), encoding="utf-8")
        print(f"Wrote {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

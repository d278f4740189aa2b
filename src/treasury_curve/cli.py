from __future__ import annotations

import argparse
import logging
import sys

from treasury_curve import __version__
from treasury_curve.config.loader import load_config
from treasury_curve.config.models import AnalyzerConfig
from treasury_curve.data.ingestion.treasury import LoadResult
from treasury_curve.reporting.exporter import export_analysis_csv, export_json
from treasury_curve.runner.run import load_from_config, run_from_config


# ============================================================
# Helpers
# ============================================================


def _config_from_args(args) -> AnalyzerConfig:
    cfg = load_config(args.config) if args.config else AnalyzerConfig()
    updates = {}
    if args.csv:
        updates["data_source"] = args.csv
    if args.date:
        updates["date_filter"] = args.date
    if args.strict:
        updates["strict_rows"] = True
    return cfg.model_copy(update=updates)


def _load(args) -> tuple[AnalyzerConfig, LoadResult | None]:
    cfg = _config_from_args(args)
    loaded = load_from_config(cfg)
    if not loaded.found:
        print(f"[treasury-curve] No usable data in {cfg.data_source}", file=sys.stderr)
        return cfg, None
    return cfg, loaded


# ============================================================
# Commands
# ============================================================


def cmd_analyze(args):
    cfg = _config_from_args(args)
    result = run_from_config(cfg, save_dir=args.out_dir)
    if not result.found:
        print(f"[treasury-curve] No usable data in {cfg.data_source}", file=sys.stderr)
        return 1

    s = result.summary
    print("\n========== Yield Curve Analysis ==========")
    print(f"Date: {s.date}")
    print(f"Shape: {s.curve_shape.value}")
    print(f"{'Maturity':>10}{'Yield (%)':>12}{'Duration':>12}{'DV01':>10}")
    for row in result.table.to_dict("records"):
        print(
            f"{row['maturity_label']:>10}{row['yield']:>12.2f}"
            f"{row['duration']:>12.2f}{row['dv01']:>10.0f}"
        )
    print(f"2s10s: {s.spread_2s10s_bps:.0f} bps ({s.spread_signal})")
    print(f"Recession probability: {s.recession_probability}")
    print(f"Market regime (3m10y {s.slope_3m10y * 100:.0f} bps): {s.market_regime}")
    print(f"Policy outlook: {s.policy_outlook}")
    print(f"Term premium: {s.term_premium * 100:.0f} bps ({s.term_premium_level})")
    for name, path in result.outputs.items():
        print(f"  wrote {name}: {path}")
    print("==========================================\n")
    return 0


def cmd_forward(args):
    _, loaded = _load(args)
    if loaded is None:
        return 1
    fwd = loaded.curve.get_forward_rate(args.start, args.end)
    print(f"Forward rate {args.start}Y -> {args.end}Y: {fwd:.2f}%")
    return 0


def cmd_spread(args):
    _, loaded = _load(args)
    if loaded is None:
        return 1
    spread = loaded.curve.get_spread(args.m1, args.m2)
    print(f"Spread ({args.m2}Y - {args.m1}Y): {spread * 100:.0f} bps")
    return 0


def cmd_summary(args):
    cfg = _config_from_args(args)
    result = run_from_config(
        cfg.model_copy(
            update={
                "output": cfg.output.model_copy(
                    update={"export_json": False, "export_csv": False}
                )
            }
        )
    )
    if not result.found:
        print(f"[treasury-curve] No usable data in {cfg.data_source}", file=sys.stderr)
        return 1
    s = result.summary
    print(f"{s.date}  3M {s.short_rate_3m:.2f}%  2Y {s.rate_2y:.2f}%  "
          f"10Y {s.benchmark_10y:.2f}%  30Y {s.long_rate_30y:.2f}%")
    print(f"2s10s {s.spread_2s10s_bps:.0f} bps ({s.spread_signal}), "
          f"shape {s.curve_shape.value}")
    return 0


def cmd_export_json(args):
    cfg, loaded = _load(args)
    if loaded is None:
        return 1
    path = export_json(
        loaded.curve,
        args.out or cfg.output.json_filename,
        source_name=cfg.source_name,
        source_url=cfg.source_url,
    )
    print(f"[treasury-curve] Snapshot written to {path}")
    return 0


def cmd_export_csv(args):
    cfg, loaded = _load(args)
    if loaded is None:
        return 1
    path = export_analysis_csv(loaded.curve, args.out or cfg.output.csv_filename)
    print(f"[treasury-curve] Analysis table written to {path}")
    return 0


def cmd_version(args):
    print(__version__)
    return 0


# ============================================================
# Main CLI
# ============================================================


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--csv", default=None, help="Rate release CSV")
    common.add_argument("--date", default=None, help="Date or date prefix")
    common.add_argument("--config", default=None, help="Path to config JSON/YAML")
    common.add_argument(
        "--strict", action="store_true", help="Require every maturity column"
    )

    parser = argparse.ArgumentParser(prog="treasury-curve")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    p_an = sub.add_parser("analyze", parents=[common], help="Full curve analysis")
    p_an.add_argument("--out-dir", default=None, help="Directory for exports")
    p_an.set_defaults(func=cmd_analyze)

    p_fwd = sub.add_parser("forward", parents=[common], help="Implied forward rate")
    p_fwd.add_argument("start", type=float)
    p_fwd.add_argument("end", type=float)
    p_fwd.set_defaults(func=cmd_forward)

    p_spr = sub.add_parser("spread", parents=[common], help="Yield spread m2 - m1")
    p_spr.add_argument("m1", type=float)
    p_spr.add_argument("m2", type=float)
    p_spr.set_defaults(func=cmd_spread)

    p_sum = sub.add_parser("summary", parents=[common], help="Quick market summary")
    p_sum.set_defaults(func=cmd_summary)

    p_json = sub.add_parser("export-json", parents=[common], help="Write snapshot")
    p_json.add_argument("--out", default=None)
    p_json.set_defaults(func=cmd_export_json)

    p_csv = sub.add_parser("export-csv", parents=[common], help="Write analysis table")
    p_csv.add_argument("--out", default=None)
    p_csv.set_defaults(func=cmd_export_csv)

    p_ver = sub.add_parser("version", help="Show version")
    p_ver.set_defaults(func=cmd_version)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

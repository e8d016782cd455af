#!/usr/bin/env python3
"""CLI and GUI launcher for regime classification and forward-bar simulation."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional
import sys

import matplotlib.pyplot as plt

from tradevision import TradeVisionError, load_bars_csv, summarize_path
from tradevision.runtime import create_session_context, fmt
from tradevision.ui.interactive import run_interactive_session
from tradevision.visualization import plot_session


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Classify the recent regime of an OHLC history and extend it with synthetic bars.",
    )
    parser.add_argument(
        "csv",
        type=Path,
        nargs="?",
        default=None,
        help="CSV export with Date, Open, High, Low, Close columns (header row required).",
    )
    parser.add_argument("--bars", type=int, default=10, help="Number of synthetic bars to generate.")
    parser.add_argument("--seed", type=int, default=None, help="Optional RNG seed.")
    parser.add_argument(
        "--device",
        type=str,
        default="cpu",
        help="PyTorch device: auto, cpu, cuda, or explicit device string.",
    )
    parser.add_argument(
        "--precision",
        choices=("float32", "float64"),
        default="float64",
        help="Floating point precision for the simulated-path summary (the regime estimate is always float64).",
    )
    parser.add_argument(
        "--save-dir",
        type=Path,
        default=Path("figures"),
        help="Directory where the chart is saved (if not disabled).",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Skip saving the chart image to disk.",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display the chart interactively after simulation.",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Launch a rich terminal session that steps bars on demand.",
    )
    parser.add_argument(
        "--gui",
        action="store_true",
        help="Force the PyQt6 chart window (falls back to CLI if PyQt6 is unavailable).",
    )
    return parser.parse_args(argv)


def execute_session(args: argparse.Namespace, *, suppress_output: bool = False) -> dict:
    messages: list[str] = []
    saved_paths: list[Path] = []

    def log(message: str = "") -> None:
        messages.append(message)
        if not suppress_output:
            print(message)

    if args.csv is None:
        raise SystemExit("A CSV file is required outside the interactive and GUI modes.")
    if args.bars < 0:
        raise SystemExit("--bars must be non-negative.")

    context = create_session_context(device=args.device, precision=args.precision, seed=args.seed)
    session = context.session

    bars = load_bars_csv(args.csv)
    estimate = session.on_history_loaded(bars)
    log(f"Loaded {len(bars)} bars. Ready.")

    if estimate is None:
        log(f"Regime: unavailable (need at least {context.config.window} bars)")
    else:
        log(f"Regime: {estimate.label}")
        log(f"Volatility: {fmt(estimate.volatility)}")
        log(f"Window change: {fmt(estimate.change)}")

    try:
        session.advance(args.bars)
    except TradeVisionError as exc:
        log(f"Simulation stopped: {exc}")
    simulated = list(session.simulated)

    summary = None
    if simulated:
        summary = summarize_path(simulated, dtype=context.config.dtype)
        log("")
        log(f"Simulated bars: {summary.n_bars}")
        log(f"First open: {fmt(summary.first_open)}")
        log(f"Last close: {fmt(summary.last_close)}")
        log(f"Total return: {fmt(summary.total_return)}")
        log(f"Realised volatility: {fmt(summary.realized_volatility)}")
        log(f"Range: {fmt(summary.min_low)} - {fmt(summary.max_high)}")
    elif not session.is_ready:
        log("No usable bars; nothing to simulate.")

    if session.history and (not args.no_save or args.show):
        fig, _ = plot_session(
            session.history,
            simulated,
            step_seconds=context.config.step_seconds,
        )
        if not args.no_save:
            save_dir = args.save_dir.expanduser()
            save_dir.mkdir(parents=True, exist_ok=True)
            chart_path = save_dir / "tradevision_chart.png"
            fig.savefig(chart_path, dpi=150, bbox_inches="tight")
            saved_paths.append(chart_path)
            log("")
            log("Saved:")
            log(f"  {chart_path}")
        if args.show:
            plt.show()
        else:
            plt.close(fig)

    return {
        "config": context.config,
        "history": session.history,
        "regime": estimate,
        "simulated": simulated,
        "summary": summary,
        "messages": messages,
        "saved_paths": saved_paths,
    }


def _qt_available() -> bool:
    try:
        import PyQt6  # noqa: F401
    except ImportError:
        return False
    return True


def main() -> None:
    args = parse_args()

    want_gui = args.gui or (len(sys.argv) == 1 and _qt_available())
    if want_gui:
        if not _qt_available():
            if args.gui:
                raise SystemExit("PyQt6 is required for the GUI. Install it with 'pip install PyQt6'.")
        else:
            from tradevision.ui.qt import launch_qt_interface

            context = create_session_context(device=args.device, precision=args.precision, seed=args.seed)
            launch_qt_interface(context, csv_path=args.csv)
            return

    auto_interactive = len(sys.argv) == 1 and sys.stdin.isatty() and sys.stdout.isatty()
    if args.interactive or auto_interactive:
        context = create_session_context(device=args.device, precision=args.precision, seed=args.seed)
        run_interactive_session(context.session, csv_path=args.csv)
        return

    try:
        execute_session(args)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Failed to run session: {exc}")


if __name__ == "__main__":
    main()

"""Rich-powered terminal front end for loading history and stepping bars forward."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.theme import Theme

from tradevision.bars import Bar
from tradevision.errors import TradeVisionError
from tradevision.ingest import load_bars_csv
from tradevision.regime import RegimeEstimate, RegimeLabel
from tradevision.session import SimulationSession

_THEME = Theme(
    {
        "accent": "bright_cyan",
        "muted": "grey70",
        "warning": "gold1",
        "success": "spring_green2",
        "bull": "spring_green2",
        "bear": "red1",
        "chop": "gold1",
    }
)

_console = Console(theme=_THEME)

_LABEL_STYLES = {
    RegimeLabel.STRONG_BULL: "bull",
    RegimeLabel.STRONG_BEAR: "bear",
    RegimeLabel.VOLATILE_CHOP: "chop",
    RegimeLabel.NEUTRAL: "muted",
}


def _prompt_int(message: str, default: int, *, minimum: Optional[int] = None) -> int:
    while True:
        response = Prompt.ask(message, default=str(default), console=_console)
        try:
            value = int(response)
        except ValueError:
            _console.print("[warning]Please enter a whole number.[/warning]")
            continue
        if minimum is not None and value < minimum:
            _console.print(f"[warning]Value must be at least {minimum}.[/warning]")
            continue
        return value


def _prompt_history(session: SimulationSession, default: Optional[Path]) -> bool:
    message = "CSV file (Date, Open, High, Low, Close)"
    while True:
        if default is not None:
            response = Prompt.ask(message, default=str(default), console=_console)
        else:
            response = Prompt.ask(message, console=_console)
        path = Path(response).expanduser()
        try:
            bars = load_bars_csv(path)
            estimate = session.on_history_loaded(bars)
        except (OSError, TradeVisionError, ValueError) as exc:
            _console.print(f"[warning]Could not load {path}: {exc}[/warning]")
            continue
        _console.print(f"[success]Loaded {len(bars)} bars. Ready.[/success]")
        show_regime(estimate, session.regime)
        return session.is_ready


def show_regime(estimate: Optional[RegimeEstimate], displayed: Optional[RegimeEstimate]) -> None:
    if estimate is None:
        _console.print("[warning]Not enough bars to classify the regime.[/warning]")
    current = displayed if estimate is None else estimate
    if current is None:
        return
    style = _LABEL_STYLES[current.label]
    body = (
        f"[{style} bold]{current.label}[/{style} bold]\n"
        f"[muted]volatility {current.volatility:.4%} | window change {current.change:+.2%}[/muted]"
    )
    _console.print(Panel.fit(body, title="Regime", border_style="accent"))


def render_bars(bars: Sequence[Bar], *, title: str = "Simulated bars") -> None:
    table = Table(title=title, show_lines=False, expand=True)
    table.add_column("Time", style="accent", no_wrap=True)
    for name in ("Open", "High", "Low", "Close"):
        table.add_column(name, justify="right")
    for bar in bars:
        close_style = "bull" if bar.close >= bar.open else "bear"
        table.add_row(
            str(bar.time),
            f"{bar.open:.4f}",
            f"{bar.high:.4f}",
            f"{bar.low:.4f}",
            f"[{close_style}]{bar.close:.4f}[/{close_style}]",
        )
    _console.print(table)


def run_interactive_session(
    session: SimulationSession,
    *,
    csv_path: Optional[Path] = None,
    default_bars: int = 1,
) -> list[Bar]:
    """Prompt for a history file, then step synthetic bars until the user enters 0."""
    _console.print(Panel.fit("[accent bold]TradeVision Forward Simulator[/accent bold]", border_style="accent"))
    _console.print(
        "Load a price history, then advance synthetic bars. Enter [accent]0[/accent] to finish.",
        style="muted",
    )

    if not _prompt_history(session, csv_path):
        _console.print("[warning]The file contained no usable bars.[/warning]")
        return []

    while True:
        count = _prompt_int("Bars to simulate", default_bars, minimum=0)
        if count == 0:
            break
        try:
            bars = session.advance(count)
        except TradeVisionError as exc:
            _console.print(f"[warning]Simulation stopped: {exc}[/warning]")
            break
        render_bars(bars)

    return list(session.simulated)

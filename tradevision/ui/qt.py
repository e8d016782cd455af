"""PyQt6 chart window: load a CSV, read the regime badge, step bars forward."""
from __future__ import annotations

from pathlib import Path
from typing import Optional
import sys

from tradevision.errors import TradeVisionError
from tradevision.ingest import load_bars_csv
from tradevision.runtime import SessionContext

try:
    from PyQt6 import QtWidgets
except ImportError:  # pragma: no cover - handled in caller
    QtWidgets = None  # type: ignore


if QtWidgets is not None:
    from tradevision.ui.qt_canvas import ChartCanvas
    from tradevision.ui.qt_theme import (
        STATUS_ERROR_COLOR,
        STATUS_READY_COLOR,
        apply_theme,
        badge_style,
    )


    class ChartWindow(QtWidgets.QMainWindow):  # type: ignore[misc]
        """Main window wiring the file picker and forward button to a session."""

        def __init__(self, context: SessionContext) -> None:
            super().__init__()
            self.setWindowTitle("TradeVision")
            self.resize(1180, 720)

            self.context = context
            self.session = context.session
            self._build_ui()
            self.session.sink = self.canvas

        def _build_ui(self) -> None:
            central = QtWidgets.QWidget(self)
            layout = QtWidgets.QVBoxLayout(central)
            layout.setContentsMargins(12, 12, 12, 12)
            layout.setSpacing(10)

            toolbar = QtWidgets.QHBoxLayout()
            self.load_button = QtWidgets.QPushButton("Load CSV")
            self.load_button.clicked.connect(self._choose_file)
            self.forward_button = QtWidgets.QPushButton("Forward")
            self.forward_button.setEnabled(False)
            self.forward_button.clicked.connect(self._advance)
            self.export_button = QtWidgets.QPushButton("Export PNG")
            self.export_button.setEnabled(False)
            self.export_button.clicked.connect(self._export_snapshot)

            self.status_label = QtWidgets.QLabel("Load a CSV file to begin.")
            self.status_label.setObjectName("status")
            self.regime_badge = QtWidgets.QLabel("--")
            self.regime_badge.setObjectName("regimeBadge")

            toolbar.addWidget(self.load_button)
            toolbar.addWidget(self.forward_button)
            toolbar.addWidget(self.export_button)
            toolbar.addSpacing(12)
            toolbar.addWidget(self.status_label, 1)
            toolbar.addWidget(self.regime_badge)
            layout.addLayout(toolbar)

            self.canvas = ChartCanvas(step_seconds=self.context.config.step_seconds, parent=central)
            layout.addWidget(self.canvas, 1)

            self.setCentralWidget(central)

        def _set_status(self, message: str, color: Optional[str] = None) -> None:
            self.status_label.setText(message)
            self.status_label.setStyleSheet(f"color: {color};" if color else "")

        def load_file(self, path: Path) -> None:
            self._set_status("Parsing Data...")
            try:
                bars = load_bars_csv(path)
                self.session.on_history_loaded(bars)
            except (OSError, ValueError) as exc:
                self._set_status(f"Failed to load {path.name}: {exc}", STATUS_ERROR_COLOR)
                return

            regime = self.session.regime
            if regime is not None:
                self.regime_badge.setText(str(regime.label))
                self.regime_badge.setStyleSheet(badge_style(regime.label))
            self._set_status(f"Loaded {len(bars)} bars. Ready.", STATUS_READY_COLOR)
            self.forward_button.setEnabled(self.session.is_ready)
            self.export_button.setEnabled(self.session.is_ready)

        def _choose_file(self) -> None:
            filename, _ = QtWidgets.QFileDialog.getOpenFileName(
                self,
                "Open price history",
                str(Path.cwd()),
                "CSV files (*.csv);;All files (*)",
            )
            if filename:
                self.load_file(Path(filename))

        def _advance(self) -> None:
            try:
                bar = self.session.on_advance_requested()
            except TradeVisionError as exc:
                self._set_status(f"Simulation stopped: {exc}", STATUS_ERROR_COLOR)
                self.forward_button.setEnabled(False)
                return
            if bar is not None:
                self._set_status(f"Simulated {len(self.session.simulated)} bars. Last close {bar.close:.4f}.")

        def _export_snapshot(self) -> None:
            filename, _ = QtWidgets.QFileDialog.getSaveFileName(
                self,
                "Export chart",
                str(Path.cwd() / "tradevision_chart.png"),
                "PNG images (*.png)",
            )
            if filename:
                self.canvas.export_png(Path(filename))
                self._set_status(f"Saved {filename}")

else:
    class ChartWindow:  # pragma: no cover - placeholder when PyQt is absent
        pass


def launch_qt_interface(context: SessionContext, *, csv_path: Optional[Path] = None) -> None:
    if QtWidgets is None:
        raise ImportError("PyQt6 is not available in this environment.")

    app = QtWidgets.QApplication.instance()
    owns_app = False
    if app is None:
        app = QtWidgets.QApplication(sys.argv[:1])
        owns_app = True
    apply_theme(app)

    window = ChartWindow(context)
    if csv_path is not None:
        window.load_file(csv_path)
    window.show()

    if owns_app:
        app.exec()

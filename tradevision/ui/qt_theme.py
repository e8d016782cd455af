"""Dark chart-terminal theme for the Qt window."""
from __future__ import annotations

from PyQt6 import QtGui, QtWidgets

from tradevision.regime import RegimeLabel

CHART_QSS = """
QWidget {
    background-color: #000000;
    color: #d1d4dc;
    font-family: 'SF Pro Display', 'Segoe UI', sans-serif;
    font-size: 14px;
}
QPushButton {
    background-color: #2962ff;
    color: white;
    border-radius: 8px;
    padding: 8px 16px;
    font-weight: 600;
}
QPushButton:hover {
    background-color: #1e53e5;
}
QPushButton:disabled {
    background-color: #2a2e39;
    color: #787b86;
}
QLabel#status {
    color: #787b86;
}
QLabel#regimeBadge {
    border: 1px solid #485c7b;
    border-radius: 10px;
    padding: 4px 12px;
    font-weight: 700;
    letter-spacing: 0.5px;
}
"""

BADGE_COLORS = {
    RegimeLabel.STRONG_BULL: "#089981",
    RegimeLabel.STRONG_BEAR: "#f23645",
    RegimeLabel.VOLATILE_CHOP: "#f7b500",
    RegimeLabel.NEUTRAL: "#d1d4dc",
}

STATUS_READY_COLOR = "#00FF00"
STATUS_ERROR_COLOR = "#f23645"


def _build_palette() -> QtGui.QPalette:
    palette = QtGui.QPalette()
    base = QtGui.QColor("#000000")
    alt_base = QtGui.QColor("#131722")
    text = QtGui.QColor("#d1d4dc")
    highlight = QtGui.QColor("#2962ff")
    disabled = QtGui.QColor("#787b86")

    def _apply(color_role: QtGui.QPalette.ColorRole, color: QtGui.QColor) -> None:
        for group in (
            QtGui.QPalette.ColorGroup.Active,
            QtGui.QPalette.ColorGroup.Inactive,
        ):
            palette.setColor(group, color_role, color)

    _apply(QtGui.QPalette.ColorRole.Window, base)
    _apply(QtGui.QPalette.ColorRole.WindowText, text)
    _apply(QtGui.QPalette.ColorRole.Base, alt_base)
    _apply(QtGui.QPalette.ColorRole.Text, text)
    _apply(QtGui.QPalette.ColorRole.Button, alt_base)
    _apply(QtGui.QPalette.ColorRole.ButtonText, text)
    _apply(QtGui.QPalette.ColorRole.Highlight, highlight)

    palette.setColor(QtGui.QPalette.ColorGroup.Disabled, QtGui.QPalette.ColorRole.ButtonText, disabled)
    return palette


def apply_theme(app: QtWidgets.QApplication) -> None:
    app.setPalette(_build_palette())
    app.setFont(QtGui.QFont("Segoe UI", 11))
    app.setStyleSheet(CHART_QSS)


def badge_style(label: RegimeLabel) -> str:
    return f"color: {BADGE_COLORS[label]};"

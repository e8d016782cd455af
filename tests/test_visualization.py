import matplotlib.pyplot as plt

from tradevision.bars import Bar
from tradevision.visualization import CandlestickChart, SIMULATED_STYLE, plot_session


def test_chart_draws_history_and_appends(make_bars, tmp_path):
    history = make_bars([100.0, 101.0, 99.5, 102.0])
    chart = CandlestickChart()
    chart.set_history(history)
    assert chart.bar_count == 4
    assert len(chart.ax.patches) == 4

    chart.append(Bar(time=history[-1].time + 86400, open=102.0, high=104.0, low=101.0, close=103.0))
    assert chart.bar_count == 5
    assert len(chart.ax.patches) == 5
    assert chart.ax.patches[-1].get_edgecolor()[:3] == (0.0, 1.0, 1.0)
    assert SIMULATED_STYLE.edge_color == "#00FFFF"

    low, high = chart.ax.get_ylim()
    assert low < 99.5 and high > 104.0

    path = chart.save(tmp_path / "charts" / "chart.png")
    assert path.exists()
    plt.close(chart.fig)


def test_reload_replaces_previous_history(make_bars):
    chart = CandlestickChart()
    chart.set_history(make_bars([1.0, 2.0, 3.0]))
    chart.set_history(make_bars([5.0, 6.0]))
    assert chart.bar_count == 2
    assert len(chart.ax.patches) == 2
    plt.close(chart.fig)


def test_plot_session(make_bars):
    history = make_bars([100.0] * 3)
    simulated = [Bar(time=history[-1].time + 86400, open=100.0, high=100.0, low=100.0, close=100.0)]
    fig, ax = plot_session(history, simulated)
    assert len(ax.patches) == 4
    plt.close(fig)

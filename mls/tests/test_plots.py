"""
Smoke test for the descent plot.
"""
import matplotlib
matplotlib.use("Agg")

from mls.lander.scenarios import load_scenario
from mls.lander.simulate import LanderSimConfig, simulate_lander
from mls.plots import plot_descent


def test_plot_descent(tmp_path, constants):
    state = load_scenario(1, constants)
    state.autopilot_enabled = True
    result = simulate_lander(LanderSimConfig(
        state=state, constants=constants, t_max_s=30.0, record_every=5, name="drop",
    ))

    fig = plot_descent(result)
    assert len(fig.axes) == 3
    assert fig.axes[0].get_ylabel() == "Altitude [km]"

    out = tmp_path / "descent.png"
    plot_descent(result, path=str(out))
    assert out.exists() and out.stat().st_size > 0

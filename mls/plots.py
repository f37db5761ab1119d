# mls/plots.py
"""
Descent plots for a finished lander run.

    plot_descent(result, path=None) -> matplotlib Figure

Three stacked panels against time: altitude, descent rate and throttle,
with vertical markers for parachute / touchdown events.
"""

from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt

from mls.lander.simulate import LanderSimResult


_EVENT_STYLE = {
    "PARACHUTE_DEPLOY": {"color": "tab:green", "linestyle": "--"},
    "PARACHUTE_LOST": {"color": "tab:red", "linestyle": "--"},
    "TOUCHDOWN": {"color": "k", "linestyle": ":"},
}


def plot_descent(result: LanderSimResult, path: Optional[str] = None, title: str = ""):
    """
    Plot altitude, descent rate and throttle histories.

    If `path` is given the figure is saved there as PNG and closed.
    """
    df = result.df
    fig, axes = plt.subplots(3, 1, sharex=True, figsize=(8, 9))

    axes[0].plot(df["t_s"], df["altitude_m"] / 1000.0)
    axes[0].set_ylabel("Altitude [km]")

    axes[1].plot(df["t_s"], df["descent_rate_mps"])
    axes[1].set_ylabel("Descent rate [m/s]")

    axes[2].plot(df["t_s"], df["throttle"])
    axes[2].set_ylabel("Throttle [-]")
    axes[2].set_ylim(-0.05, 1.05)
    axes[2].set_xlabel("Time [s]")

    for ax in axes:
        ax.grid(True)
        for ev in result.events:
            style = _EVENT_STYLE.get(ev.label, {})
            ax.axvline(ev.t_s, **style)

    for ev in result.events:
        axes[0].text(ev.t_s, axes[0].get_ylim()[1] * 0.9, " " + ev.label,
                     rotation=90, va="top", ha="left", fontsize=8)

    fig.suptitle(title or result.meta.get("name") or "Lander descent")
    fig.tight_layout()

    if path is not None:
        fig.savefig(path, dpi=200, bbox_inches="tight")
        plt.close(fig)
    return fig


__all__ = ["plot_descent"]

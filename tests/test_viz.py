# tests/test_viz.py
"""
Plotting smoke tests (Agg backend, nothing is shown).
"""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from reservoir_arm.pipeline import build_network
from reservoir_arm.ranges import Range
from reservoir_arm.viz import plot_network, save_network_plot

GRAMMAR = """
shoulder 0 0
elbow 0 5
hand 0 10
input 0 1
input 0 4
input 0 6
input 0 9
productionRules A->acA
createMass a [1, 3]
createSpring c [0.5, 4]
expansionRangeX [-6, 6]
"""


def _graph():
    return build_network(GRAMMAR, "(3){A}", np.random.default_rng(4)).model.graph


def test_plot_network_draws_every_spring():
    graph = _graph()
    fig, ax = plot_network(graph, expansion_range_x=Range(-6, 6))

    # one line per spring plus the two expansion range bounds
    assert len(ax.lines) == len(graph.springs) + 2
    assert ax.get_title() == "Robot Arm Mass-Spring Network"
    plt.close(fig)


def test_plot_on_existing_axis():
    graph = _graph()
    fig, ax = plt.subplots()
    returned_fig, returned_ax = plot_network(graph, ax=ax, title="arm")

    assert returned_ax is ax
    assert returned_fig is fig
    assert len(ax.lines) == len(graph.springs)
    plt.close(fig)


def test_save_network_plot(tmp_path):
    outpath = tmp_path / "plots" / "network.png"
    save_network_plot(_graph(), str(outpath), expansion_range_x=Range(-6, 6))

    assert outpath.exists()
    assert outpath.stat().st_size > 0
    print(f"✓ Network plot written to {outpath}")

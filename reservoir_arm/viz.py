"""
VISUALIZATION: PLOTTING THE ARM AND ITS NETWORK
===============================================

PURPOSE:
--------
Draws a NetworkGraph the way the physics simulator will see it: springs as
lines, masses as markers in their type colour (shoulder red, elbow gray,
hand blue, arm segments light gray, inputs green, network white).

Rigid skeleton connections (FIXED, ROBOT_ARM_*) are drawn thicker than
network springs, so the arm stands out from the grown network.

If an expansion range is given, its bounds are drawn as dashed vertical lines:
no mass placed by createMass can lie outside them.
"""

import os
from typing import Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.lines import Line2D

from .graph.mass import MassType
from .graph.network import NetworkGraph
from .graph.spring import ConnectionType
from .ranges import Range

COLORS = {
    'background': '#FAFAFA',
    'spring': '#3498DB',         # Sky blue (network springs)
    'skeleton': '#2C3E50',       # Dark blue-gray (rigid arm)
    'mass_edge': '#2C3E50',
    'expansion_range': '#E67E22',
}

FONT_TITLE = {'family': 'sans-serif', 'weight': 'bold', 'size': 14}
FONT_LABEL = {'family': 'sans-serif', 'weight': 'normal', 'size': 11}


def plot_network(
    graph: NetworkGraph,
    expansion_range_x: Optional[Range] = None,
    ax=None,
    title: str = "Robot Arm Mass-Spring Network",
) -> Tuple:
    """
    Draw the graph on a matplotlib axis.

    Parameters:
    -----------
    graph : NetworkGraph
        Masses and springs to draw
    expansion_range_x : Range, optional
        Drawn as two dashed vertical lines
    ax : matplotlib Axes, optional
        Axis to draw on; a new figure is created when omitted
    title : str
        Axis title

    Returns:
    --------
    (fig, ax)
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 10), facecolor=COLORS['background'])
    else:
        fig = ax.figure
    ax.set_facecolor(COLORS['background'])

    # Springs first so the mass markers sit on top
    for spring in graph.springs:
        (x1, y1), (x2, y2) = spring.line
        if spring.connection_type is ConnectionType.SPRING:
            ax.plot([x1, x2], [y1, y2], color=COLORS['spring'], linewidth=1.0, zorder=1)
        else:
            ax.plot([x1, x2], [y1, y2], color=COLORS['skeleton'], linewidth=3.0, zorder=2)

    for mass_type in MassType:
        masses = graph.masses_of_type(mass_type)
        if not masses:
            continue
        ax.scatter(
            [m.x for m in masses], [m.y for m in masses],
            s=60, c=mass_type.color, edgecolors=COLORS['mass_edge'],
            linewidths=1.0, zorder=3, label=mass_type.name.lower(),
        )

    if expansion_range_x is not None:
        for bound in (expansion_range_x.min, expansion_range_x.max):
            ax.axvline(bound, color=COLORS['expansion_range'], linestyle='--',
                       linewidth=1.0, zorder=0)

    handles, labels = ax.get_legend_handles_labels()
    if expansion_range_x is not None:
        handles.append(Line2D([0], [0], color=COLORS['expansion_range'], linestyle='--'))
        labels.append('expansion range')
    if handles:
        ax.legend(handles, labels, loc='best', fontsize=9)

    ax.set_xlabel('x', fontdict=FONT_LABEL)
    ax.set_ylabel('y', fontdict=FONT_LABEL)
    ax.set_title(title, fontdict=FONT_TITLE)
    ax.set_aspect('equal', adjustable='datalim')
    ax.grid(True, alpha=0.3)

    return fig, ax


def save_network_plot(
    graph: NetworkGraph,
    outpath: str,
    expansion_range_x: Optional[Range] = None,
    title: str = "Robot Arm Mass-Spring Network",
) -> None:
    """Draw the graph and write it to outpath (PNG by extension)."""
    fig, _ = plot_network(graph, expansion_range_x=expansion_range_x, title=title)

    os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)

    fig.savefig(outpath, dpi=150, bbox_inches='tight', facecolor=COLORS['background'])
    plt.close(fig)

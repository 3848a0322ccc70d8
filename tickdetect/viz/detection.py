"""Movement, probability, abundance and detection plots for TickDetect.

Every function:
  - Accepts a SimulationResult as input
  - Returns a matplotlib Figure
  - Has an optional ``save_path`` parameter (saves PNG when given)
  - Uses the shared dark theme from ``tickdetect.viz.style``

matplotlib backend is forced to Agg (no display) on import.
"""

from __future__ import annotations

import matplotlib
matplotlib.use('Agg')

from typing import Optional, TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np

from tickdetect.abundance import mean_abundance_trend
from tickdetect.config import SimulationConfig, default_config
from tickdetect.detection import detection_probability, group_offset
from tickdetect.types import GROUPS
from tickdetect.viz.style import (
    GROUP_COLORS,
    POINT_ALPHA,
    TREND_ALPHA,
    dark_figure,
    save_figure,
    style_legend,
)

if TYPE_CHECKING:
    from tickdetect.types import SimulationResult


def _day_grid(result: 'SimulationResult', n: int = 200) -> np.ndarray:
    return np.linspace(0.0, float(result.days.max()), n)


# ═══════════════════════════════════════════════════════════════════════
# PANEL DRAWERS (shared with the dashboard)
# ═══════════════════════════════════════════════════════════════════════

def _draw_distance(ax, result):
    for group in GROUPS:
        mv = result.movement[group]
        ax.scatter(mv.day, mv.distance, s=14, alpha=POINT_ALPHA,
                   color=GROUP_COLORS[group], label=group.label)
    ax.set_xlabel('Elapsed day', fontsize=12)
    ax.set_ylabel('Distance moved (m)', fontsize=12)
    ax.set_title('Movement', fontsize=14, fontweight='bold')
    ax.set_ylim(bottom=0)
    style_legend(ax)


def _draw_probability(ax, result, config):
    x_max = max(float(result.movement[g].distance.max()) for g in GROUPS)
    grid = np.linspace(0.0, max(x_max, 1.0), 200)
    for group in GROUPS:
        pr = result.probability[group]
        color = GROUP_COLORS[group]
        ax.scatter(pr.distance, pr.probability, s=14, alpha=POINT_ALPHA,
                   color=color, label=group.label)
        offset = group_offset(group, config.detection)
        ax.plot(grid, detection_probability(grid, offset), color=color,
                alpha=TREND_ALPHA, linewidth=1.5, linestyle='--')
    ax.set_xlabel('Distance moved (m)', fontsize=12)
    ax.set_ylabel('Detection probability', fontsize=12)
    ax.set_title('Distance → Detection Probability', fontsize=14,
                 fontweight='bold')
    ax.set_ylim(0, 1)
    style_legend(ax)


def _draw_abundance(ax, result, config):
    grid = _day_grid(result)
    for group in GROUPS:
        ab = result.abundance[group]
        color = GROUP_COLORS[group]
        ax.scatter(ab.day, ab.count, s=14, alpha=POINT_ALPHA, color=color,
                   label=group.label)
        ax.plot(grid, mean_abundance_trend(group, grid, config.abundance),
                color=color, alpha=TREND_ALPHA, linewidth=1.5, linestyle='--')
    ax.set_xlabel('Elapsed day', fontsize=12)
    ax.set_ylabel('Live ticks', fontsize=12)
    ax.set_title('Abundance', fontsize=14, fontweight='bold')
    ax.set_ylim(bottom=0)
    style_legend(ax)


def _draw_detections(ax, result):
    for group in GROUPS:
        det = result.detections[group]
        ax.scatter(det.day, det.count, s=14, alpha=POINT_ALPHA,
                   color=GROUP_COLORS[group], label=group.label)
    ax.set_xlabel('Elapsed day', fontsize=12)
    ax.set_ylabel('Ticks detected', fontsize=12)
    ax.set_title('Detections', fontsize=14, fontweight='bold')
    ax.set_ylim(bottom=0)
    style_legend(ax)


# ═══════════════════════════════════════════════════════════════════════
# FIGURES
# ═══════════════════════════════════════════════════════════════════════

def plot_distance_vs_day(
    result: 'SimulationResult',
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Distance moved per replicate against elapsed day, by group."""
    fig, ax = dark_figure()
    _draw_distance(ax, result)
    if save_path:
        save_figure(fig, save_path)
    return fig


def plot_probability_vs_distance(
    result: 'SimulationResult',
    config: Optional[SimulationConfig] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Detection probability against distance, with each group's transform.

    Args:
        result: SimulationResult.
        config: Config whose offsets drew the curves; defaults if None.
        save_path: Optional path to save the figure.

    Returns:
        matplotlib Figure.
    """
    config = config or default_config()
    fig, ax = dark_figure()
    _draw_probability(ax, result, config)
    if save_path:
        save_figure(fig, save_path)
    return fig


def plot_abundance_vs_day(
    result: 'SimulationResult',
    config: Optional[SimulationConfig] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Live ticks against elapsed day, with the noise-free mean trend."""
    config = config or default_config()
    fig, ax = dark_figure()
    _draw_abundance(ax, result, config)
    if save_path:
        save_figure(fig, save_path)
    return fig


def plot_detections_vs_day(
    result: 'SimulationResult',
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Detected ticks against elapsed day, by group."""
    fig, ax = dark_figure()
    _draw_detections(ax, result)
    if save_path:
        save_figure(fig, save_path)
    return fig


def plot_dashboard(
    result: 'SimulationResult',
    config: Optional[SimulationConfig] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """2×2 overview: movement, probability, abundance, detections."""
    config = config or default_config()
    fig, axes = dark_figure(nrows=2, ncols=2, figsize=(14, 10))
    _draw_distance(axes[0, 0], result)
    _draw_probability(axes[0, 1], result, config)
    _draw_abundance(axes[1, 0], result, config)
    _draw_detections(axes[1, 1], result)
    if save_path:
        save_figure(fig, save_path)
    return fig

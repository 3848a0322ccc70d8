"""Smoke tests for tickdetect.viz — every plot returns a Figure and saves."""

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest

from tickdetect.config import apply_overrides, default_config
from tickdetect.model import run_simulation
from tickdetect.viz import (
    GROUP_COLORS,
    plot_abundance_vs_day,
    plot_dashboard,
    plot_detections_vs_day,
    plot_distance_vs_day,
    plot_probability_vs_distance,
)
from tickdetect.types import GROUPS


@pytest.fixture(scope="module")
def config():
    return apply_overrides(default_config(),
                           {'simulation': {'seed': 5, 'n_replicates': 40}})


@pytest.fixture(scope="module")
def result(config):
    return run_simulation(config)


def test_group_colors_cover_groups():
    assert set(GROUP_COLORS) == set(GROUPS)


@pytest.mark.parametrize("plot_fn", [
    plot_distance_vs_day,
    plot_detections_vs_day,
])
def test_result_only_plots(result, plot_fn, tmp_path):
    fig = plot_fn(result)
    assert isinstance(fig, plt.Figure)
    plt.close(fig)

    out = tmp_path / f"{plot_fn.__name__}.png"
    plot_fn(result, save_path=str(out))
    assert out.exists()


@pytest.mark.parametrize("plot_fn", [
    plot_probability_vs_distance,
    plot_abundance_vs_day,
    plot_dashboard,
])
def test_config_plots(result, config, plot_fn, tmp_path):
    fig = plot_fn(result, config=config)
    assert isinstance(fig, plt.Figure)
    plt.close(fig)

    out = tmp_path / f"{plot_fn.__name__}.png"
    plot_fn(result, config=config, save_path=str(out))
    assert out.exists()


def test_dashboard_has_four_panels(result):
    fig = plot_dashboard(result)
    assert len(fig.axes) == 4
    plt.close(fig)

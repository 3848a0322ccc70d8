"""TickDetect visualization library.

Modules:
  - style: Dark theme colours and helpers
  - detection: Movement, probability, abundance and detection plots
"""

from tickdetect.viz.style import (  # noqa: F401
    DARK_BG,
    DARK_PANEL,
    GRID_COLOR,
    GROUP_COLORS,
    TEXT_COLOR,
    apply_dark_theme,
    dark_figure,
    save_figure,
)

from tickdetect.viz.detection import (  # noqa: F401
    plot_abundance_vs_day,
    plot_dashboard,
    plot_detections_vs_day,
    plot_distance_vs_day,
    plot_probability_vs_distance,
)

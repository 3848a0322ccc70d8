"""Long-format pandas tables over simulation results.

One row per (group, replicate). Stage tables are joined on replicate index
within a group, never on day value.
"""

from __future__ import annotations

from typing import List

import pandas as pd

from tickdetect.types import GROUPS, SimulationResult

COLUMNS = ['group', 'replicate', 'day', 'distance', 'probability',
           'abundance', 'detections']


def result_to_frame(result: SimulationResult) -> pd.DataFrame:
    """Flatten one run into a DataFrame with COLUMNS."""
    frames = []
    for group in GROUPS:
        prob = result.probability[group]
        frames.append(pd.DataFrame({
            'group': group.label,
            'replicate': prob.replicate,
            'day': prob.day,
            'distance': prob.distance,
            'probability': prob.probability,
            'abundance': result.abundance[group].count,
            'detections': result.detections[group].count,
        }))
    return pd.concat(frames, ignore_index=True)[COLUMNS]


def ensemble_to_frame(results: List[SimulationResult]) -> pd.DataFrame:
    """Stack several runs, adding a leading 'run' column."""
    if not results:
        return pd.DataFrame(columns=['run'] + COLUMNS)
    frames = []
    for run, result in enumerate(results):
        frame = result_to_frame(result)
        frame.insert(0, 'run', run)
        frames.append(frame)
    return pd.concat(frames, ignore_index=True)


def group_means(frame: pd.DataFrame) -> pd.DataFrame:
    """Per-group mean of each numeric column (excluding replicate)."""
    numeric = ['day', 'distance', 'probability', 'abundance', 'detections']
    return frame.groupby('group', sort=False)[numeric].mean()

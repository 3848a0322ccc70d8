"""Utility functions for TickDetect.

General-purpose helpers: config hashing, timing.
"""

from __future__ import annotations

import hashlib
import time
from contextlib import contextmanager
from typing import Generator

import yaml

from tickdetect.config import SimulationConfig, config_to_dict


def config_hash(config: SimulationConfig) -> str:
    """SHA-256 of a config's canonical YAML dump (for tagging runs)."""
    text = yaml.safe_dump(config_to_dict(config), sort_keys=True)
    return hashlib.sha256(text.encode('utf-8')).hexdigest()


@contextmanager
def timer(label: str = "") -> Generator[None, None, None]:
    """Simple context-manager timer. Prints elapsed time on exit."""
    start = time.perf_counter()
    yield
    elapsed = time.perf_counter() - start
    if label:
        print(f"[{label}] {elapsed:.3f}s")
    else:
        print(f"Elapsed: {elapsed:.3f}s")

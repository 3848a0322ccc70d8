"""TickDetect: simulated trap detections of ticks after warm or cold history.

A batch stochastic model coupling:
  - Movement: distance moved per replicate (linear decline for warm-history
    ticks, day-independent for cold-history ticks)
  - Detection probability: saturating transform of distance
  - Abundance: linear mortality (warm) vs noisy logistic mortality (cold)
  - Detections: Binomial(abundance, probability) per replicate

All parameters are fixed prior beliefs; nothing is fitted to field data.
"""

__version__ = "0.1.0"

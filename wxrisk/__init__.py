"""
Weather risk and temporal analysis engine for pilot briefings.

Pure evaluators that turn normalized observations and forecasts into
hazard alerts, day/night boundaries, departure windows, trends and
change deltas.
"""

__version__ = "0.1.0"

"""
Configuration & Global Constants
================================
Central registry of the limits and timings used by the controllers and
the GUI, so no magic numbers are scattered through the widgets.
"""

# Disk counts
MIN_DISKS: int = 1
MAX_GUI_DISKS: int = 12
DEFAULT_DISKS: int = 3

# Animation (progress increment per tick, tick interval)
ANIMATION_STEP: float = 0.1
ANIMATION_INTERVAL_MS: int = 15
# Pause between moves during auto-play
AUTOPLAY_DELAY_MS: int = 150

# Benchmark sweep
BENCHMARK_INTERVAL_MS: int = 10
DEFAULT_SWEEP_MIN: int = 1
DEFAULT_SWEEP_MAX: int = 20
MAX_SWEEP_DISKS: int = 30
DEFAULT_SWEEP_BUDGET_MS: float = 5000.0

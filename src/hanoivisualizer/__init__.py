"""Tower of Hanoi visualizer: optimal move planning, animated playback and planner benchmarks."""

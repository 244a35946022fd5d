"""Template trees shared by the benchmarks."""

"""Energy-aware DVFS CPU scheduling simulator."""

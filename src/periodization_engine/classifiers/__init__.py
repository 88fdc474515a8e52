"""Per-week signal classifiers (volume, intensity, TSS)."""

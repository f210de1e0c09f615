"""HTTP boundary for the clustering core."""

"""Article Review — versioned article submissions with peer review."""

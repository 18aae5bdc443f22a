"""Public API: facade functions and response models."""

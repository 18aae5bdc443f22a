"""Case-file corpus lookups."""

"""Case analysis pipeline: model call, normalization, orchestration."""

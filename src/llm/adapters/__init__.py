"""Provider-specific LLM client implementations."""

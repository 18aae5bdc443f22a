"""LLM client abstraction and provider adapters."""

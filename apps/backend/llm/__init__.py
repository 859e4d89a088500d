"""LLM completion client and error taxonomy for the support chat backend."""

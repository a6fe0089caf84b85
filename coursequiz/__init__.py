"""Course quiz generation: content chunking and resilient LLM generation."""

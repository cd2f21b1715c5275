"""OpenAI-compatible chat-completions provider wire format."""

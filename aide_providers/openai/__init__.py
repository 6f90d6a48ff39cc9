"""OpenAI (GPT) wire format for the AIDE gateway."""

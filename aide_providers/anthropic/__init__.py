"""Anthropic (Claude) wire format for the AIDE gateway."""

"""Resilient structured-output client for a local Ollama server."""

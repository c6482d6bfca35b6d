"""Shared infrastructure: config, logging, storage slots, and the LLM transport."""

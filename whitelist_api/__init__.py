"""Whitelist of technicians authorized to use the chatbot."""

__version__ = "1.0.0"

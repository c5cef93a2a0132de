"""Logging and error handling shared across FlowParse."""

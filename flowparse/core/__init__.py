"""Configuration and clock helpers for FlowParse."""

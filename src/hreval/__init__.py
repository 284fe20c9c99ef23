"""Structured, policy-checked interview evaluations from LLM output."""

__version__ = "0.1.0"

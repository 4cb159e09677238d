"""Core timestamp, logging, and configuration building blocks."""

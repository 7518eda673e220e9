"""Unit test configuration.

Unit tests should not depend on app.py or external services; they wire
in-memory adapters themselves.
"""

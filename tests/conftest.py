"""Pytest configuration and shared fixtures."""

from hypothesis import settings

# Key generation is fast but not constant-time; a per-example deadline only adds flakiness.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")

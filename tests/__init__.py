"""Memento test suite."""

"""Root conftest — shared test configuration."""

import os

# Ensure tests never depend on the host zone or a developer's .env
os.environ.setdefault("MEMENTO_TIMEZONE", "UTC")
os.environ.setdefault("MEMENTO_LOG_FORMAT", "json")

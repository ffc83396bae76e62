"""Configuration constants (see :mod:`launcher_sync.config.settings`)."""

"""memagent — a single agent with prioritized actions and bounded, recallable memory."""

__version__ = "0.1.0"

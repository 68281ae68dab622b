"""daybook: dated task groups, lists and tasks, persisted to a local slot store."""

__version__ = "0.1.0"

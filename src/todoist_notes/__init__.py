"""Turn today's completed Todoist tasks into markdown notes inside a vault."""

__version__ = "0.1.0"

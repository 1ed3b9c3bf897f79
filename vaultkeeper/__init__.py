"""Password vault building blocks: conversation handlers, hashing, event log and reports."""

__version__ = "0.1.0"
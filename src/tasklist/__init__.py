"""tasklist - interactive command-line task list with undo and plain-text persistence."""

__version__ = "0.1.0"

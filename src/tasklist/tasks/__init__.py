"""
Task subsystem.

Components:
- task_models.py: data structures (Task, SortKey)
- task_store.py: in-memory list, id counter and undo stack
- task_codec.py: line-oriented text file load/save
"""

from .task_codec import LoadResult, TaskFileCodec, TaskFileError
from .task_models import SortKey, Task
from .task_store import TaskStore

__all__ = ["LoadResult", "SortKey", "Task", "TaskFileCodec", "TaskFileError", "TaskStore"]

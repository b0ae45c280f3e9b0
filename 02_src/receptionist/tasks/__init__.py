"""Tasks module."""

from .manager import FINAL_EVENT_STATES, ITaskManager, TaskManager

__all__ = ["FINAL_EVENT_STATES", "ITaskManager", "TaskManager"]

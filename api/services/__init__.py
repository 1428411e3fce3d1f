"""
Services package - Business logic layer for the API
All functional logic should be implemented here, separate from HTTP routing
"""
from api.services.task_store import Task, TaskStore, TaskValidationError

__all__ = ['Task', 'TaskStore', 'TaskValidationError']

# apps/tasks/domain/services/__init__.py
from .task_service import TaskService, arrange_as_tree, calculate_progress

__all__ = ['TaskService', 'arrange_as_tree', 'calculate_progress']

"""Task services: the executor and assigner passes run every tick.

Architecture Note:
    Both passes mutate the caller-owned AssignmentStore in place. The
    executor must finish before the assigner starts so that the assigner
    sees the targets and exclusivity slots freed this tick.
"""

from colonytasks.tasks.assigner import TaskAssigner, best_fit
from colonytasks.tasks.executor import TaskExecutor
from colonytasks.tasks.result import PassResult

__all__ = [
    "TaskAssigner",
    "TaskExecutor",
    "PassResult",
    "best_fit",
]

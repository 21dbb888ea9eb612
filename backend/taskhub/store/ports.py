"""
Store port - the persistence capability the task handlers depend on.

Handlers only ever talk to this interface, so the storage engine behind it
can be swapped without touching routing or schemas.
"""
from typing import List, Mapping, Optional, Protocol

from taskhub.models.task import Task


class TaskStore(Protocol):
    async def insert(self, fields: Mapping[str, str]) -> Task:
        """Persist a new task. The store assigns id and timestamps."""
        ...

    async def find(self) -> List[Task]:
        ...

    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """Return the task, or None when no task has that id."""
        ...

    async def find_and_update(self, task_id: str, fields: Mapping[str, str]) -> Optional[Task]:
        """Apply ``fields`` atomically and return the post-update state, or None."""
        ...

    async def find_and_delete(self, task_id: str) -> Optional[Task]:
        """Remove the task and return it as it was, or None."""
        ...

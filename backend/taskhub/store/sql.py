import logging
from typing import List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskhub.models.task import Task, utcnow

logger = logging.getLogger(__name__)


class SqlAlchemyTaskStore:
    """TaskStore backed by an async SQLAlchemy session factory.

    Every call runs in its own session, so each operation is a single unit of
    work committed (or rolled back) before returning.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def insert(self, fields: Mapping[str, str]) -> Task:
        async with self._session_factory() as session:
            task = Task(**fields)
            session.add(task)
            await session.commit()
            await session.refresh(task)
            logger.debug("Inserted task %s", task.id)
            return task

    async def find(self) -> List[Task]:
        async with self._session_factory() as session:
            result = await session.execute(select(Task))
            return list(result.scalars().all())

    async def find_by_id(self, task_id: str) -> Optional[Task]:
        async with self._session_factory() as session:
            return await session.get(Task, task_id)

    async def find_and_update(self, task_id: str, fields: Mapping[str, str]) -> Optional[Task]:
        async with self._session_factory() as session:
            async with session.begin():
                task = await session.get(Task, task_id, with_for_update=True)
                if task is None:
                    return None
                for key, value in fields.items():
                    setattr(task, key, value)
                task.updated_at = utcnow()
            await session.refresh(task)
            return task

    async def find_and_delete(self, task_id: str) -> Optional[Task]:
        async with self._session_factory() as session:
            async with session.begin():
                task = await session.get(Task, task_id, with_for_update=True)
                if task is None:
                    return None
                await session.delete(task)
            return task

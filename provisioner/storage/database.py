"""SQLAlchemy-backed project storage."""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from ..contracts import ProjectRecord
from ..logging import get_logger
from .models import Base, ProjectRow

logger = get_logger(__name__)


def _payload(project: ProjectRecord) -> dict:
    return project.model_dump(mode="json", by_alias=True)


class SqlProjectStorage:
    """Stores each project as one row with the record serialized to JSON."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_maker = async_sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlProjectStorage":
        return cls(create_async_engine(database_url, echo=False))

    async def create_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def get(self, key: str) -> ProjectRecord | None:
        async with self._session_maker() as session:
            row = await session.get(ProjectRow, key)
            if row is None:
                return None
            return ProjectRecord.model_validate(row.payload)

    async def store(self, project: ProjectRecord) -> str:
        async with self._session_maker() as session:
            row = ProjectRow(key=project.key, name=project.name, payload=_payload(project))
            await session.merge(row)
            await session.commit()
        location = f"projects/{project.key}"
        logger.debug("project_row_stored", project_key=project.key, location=location)
        return location

    async def update(self, project: ProjectRecord) -> bool:
        async with self._session_maker() as session:
            row = await session.get(ProjectRow, project.key)
            if row is None:
                return False
            row.name = project.name
            row.payload = _payload(project)
            await session.commit()
        return True

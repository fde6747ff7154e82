"""In-memory project storage for local development and tests.

Records are copied on the way in and out so callers never share state with
the store.
"""

from ..contracts import ProjectRecord


class InMemoryProjectStorage:
    def __init__(self) -> None:
        self._projects: dict[str, ProjectRecord] = {}

    async def get(self, key: str) -> ProjectRecord | None:
        project = self._projects.get(key)
        return project.model_copy(deep=True) if project else None

    async def store(self, project: ProjectRecord) -> str:
        self._projects[project.key] = project.model_copy(deep=True)
        return f"memory://projects/{project.key}"

    async def update(self, project: ProjectRecord) -> bool:
        if project.key not in self._projects:
            return False
        self._projects[project.key] = project.model_copy(deep=True)
        return True

    def keys(self) -> list[str]:
        return list(self._projects)

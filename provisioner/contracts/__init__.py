from .project import (
    ExecutionsData,
    ExistsResult,
    GeneratedKey,
    JobDefinition,
    ProjectRecord,
    ProjectTemplates,
    RepositoryData,
)

__all__ = [
    "ExecutionsData",
    "ExistsResult",
    "GeneratedKey",
    "JobDefinition",
    "ProjectRecord",
    "ProjectTemplates",
    "RepositoryData",
]

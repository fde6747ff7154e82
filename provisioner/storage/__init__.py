from .database import SqlProjectStorage
from .memory import InMemoryProjectStorage
from .models import Base, ProjectRow

__all__ = ["Base", "InMemoryProjectStorage", "ProjectRow", "SqlProjectStorage"]

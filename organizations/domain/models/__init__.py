from .organization import Organization
from .project import Project

__all__ = ["Organization", "Project"]

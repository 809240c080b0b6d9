"""Data-access layer: access policies, the repository and identity lifecycle."""

from professor_aid.services.policies import Operation, PolicyEngine, default_engine
from professor_aid.services.repository import CallerContext, Repository

__all__ = ["Operation", "PolicyEngine", "default_engine", "CallerContext", "Repository"]

# Version Control
from .log import VersionLog, compute_commit_hash
from .rollback import RollbackEngine

__all__ = [
    "VersionLog",
    "compute_commit_hash",
    "RollbackEngine",
]

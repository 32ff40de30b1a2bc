"""Migration steps and the runner that sequences them."""

from .exceptions import (
    MigrationError,
    MigrationStepError,
    ProjectNotFoundError,
    RepositoryNotFoundError,
)
from .repositories import RepoResolver
from .labels import LabelCopier, LabelCopyResult
from .issues import IssueCopier
from .projects import ProjectCopier, ProjectLinker
from .runner import MigrationReport, MigrationRunner, MigrationStep, StepStatus
from .engine import MigrationEngine

__all__ = [
    'MigrationError',
    'MigrationStepError',
    'ProjectNotFoundError',
    'RepositoryNotFoundError',
    'RepoResolver',
    'LabelCopier',
    'LabelCopyResult',
    'IssueCopier',
    'ProjectCopier',
    'ProjectLinker',
    'MigrationReport',
    'MigrationRunner',
    'MigrationStep',
    'StepStatus',
    'MigrationEngine',
]

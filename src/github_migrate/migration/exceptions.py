"""Errors raised by the migration steps."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .runner import MigrationReport


class MigrationError(Exception):
    """Base exception for migration failures."""

    pass


class RepositoryNotFoundError(MigrationError):
    """A repository does not exist and was not allowed to be created."""

    def __init__(self, owner: str, name: str):
        super().__init__(f'Repository does not exist: {owner}/{name}')
        self.owner = owner
        self.name = name


class ProjectNotFoundError(MigrationError):
    """An organization has no project with the requested number."""

    def __init__(self, organization: str, number: int):
        super().__init__(f'Project {number} not found in organization {organization}')
        self.organization = organization
        self.number = number


class MigrationStepError(MigrationError):
    """A step failed; carries the report of what had completed before it."""

    def __init__(
        self, step: str, report: 'MigrationReport', cause: Optional[BaseException] = None
    ):
        super().__init__(f'Step "{step}" failed: {cause}')
        self.step = step
        self.report = report
        self.cause = cause

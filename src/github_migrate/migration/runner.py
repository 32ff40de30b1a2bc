"""Sequencing of the migration steps."""

from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from typing import Iterator, List, Optional

from loguru import logger
from pydantic import BaseModel, Field

from ..api.client import GitHubClient
from ..config.config import MigrationConfig
from ..models.repository import RepoRef
from .exceptions import MigrationStepError, RepositoryNotFoundError
from .issues import IssueCopier
from .labels import LabelCopier
from .projects import ProjectCopier, ProjectLinker
from .repositories import RepoResolver


class MigrationStep(str, Enum):
    """The fixed steps of a run, in execution order."""

    RESOLVE_SOURCE_REPO = 'resolve_source_repo'
    RESOLVE_DEST_REPO = 'resolve_dest_repo'
    COPY_LABELS = 'copy_labels'
    COPY_ISSUES = 'copy_issues'
    FETCH_SOURCE_PROJECT = 'fetch_source_project'
    COPY_PROJECT = 'copy_project'
    ATTACH_ISSUES = 'attach_issues'
    LINK_REPOSITORY = 'link_repository'


class StepStatus(str, Enum):
    """Step status enumeration."""

    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'
    SKIPPED = 'skipped'


class StepRecord(BaseModel):
    """Outcome of one step."""

    step: MigrationStep = Field(..., description='Step name')
    status: StepStatus = Field(default=StepStatus.PENDING, description='Step status')
    detail: Optional[str] = Field(default=None, description='Short outcome note')


class MigrationReport(BaseModel):
    """What a run did, step by step.

    Returned on success and attached to ``MigrationStepError`` on failure.
    Nothing recorded here is ever rolled back.
    """

    source: str = Field(..., description='Source repository full name')
    destination: str = Field(..., description='Destination repository full name')
    steps: List[StepRecord] = Field(
        default_factory=lambda: [StepRecord(step=step) for step in MigrationStep]
    )

    labels_created: List[str] = Field(default_factory=list)
    labels_skipped: List[str] = Field(default_factory=list)
    issue_ids: List[str] = Field(default_factory=list)
    project_id: Optional[str] = Field(default=None, description='Copied project ID')

    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = Field(default=None)

    def record(self, step: MigrationStep) -> StepRecord:
        return next(r for r in self.steps if r.step == step)

    @property
    def completed_steps(self) -> List[MigrationStep]:
        return [r.step for r in self.steps if r.status == StepStatus.COMPLETED]

    @property
    def failed_step(self) -> Optional[MigrationStep]:
        for r in self.steps:
            if r.status == StepStatus.FAILED:
                return r.step
        return None

    @property
    def succeeded(self) -> bool:
        return all(r.status == StepStatus.COMPLETED for r in self.steps)


class MigrationRunner:
    """Runs the migration as a strict linear sequence.

    Source and destination repositories are resolved before anything is
    copied, and the project is copied only after every issue exists.
    """

    def __init__(
        self,
        client: GitHubClient,
        config: MigrationConfig,
        create_repo: bool = False,
    ):
        """Initialize migration runner.

        Args:
            client: Client shared by every step
            config: Migration configuration
            create_repo: Create the destination repository when missing
        """
        self.client = client
        self.config = config
        self.create_repo = create_repo
        self.logger = logger.bind(component='MigrationRunner')

        self.repos = RepoResolver(client)
        self.labels = LabelCopier(client)
        self.issues = IssueCopier(client)
        self.projects = ProjectCopier(client)
        self.linker = ProjectLinker(client)

    async def run(self) -> MigrationReport:
        """Execute every step in order.

        Returns:
            Report with all steps completed

        Raises:
            RepositoryNotFoundError: If a repository is missing and may not
                be created
            MigrationStepError: If any other step fails
        """
        config = self.config
        source = RepoRef(owner=config.source_organization, name=config.source_repo)
        dest = RepoRef(owner=config.dest_organization, name=config.dest_repo)
        report = MigrationReport(source=source.full_name, destination=dest.full_name)

        try:
            await self._run_steps(source, dest, report)
        except RepositoryNotFoundError:
            raise
        except Exception as e:
            self.logger.error(f'Migration stopped at {report.failed_step.value}: {e}')
            raise MigrationStepError(report.failed_step.value, report, e) from e

        report.completed_at = datetime.now()
        return report

    async def _run_steps(
        self, source: RepoRef, dest: RepoRef, report: MigrationReport
    ) -> None:
        config = self.config

        with self._step(report, MigrationStep.RESOLVE_SOURCE_REPO) as record:
            source.node_id = await self.repos.resolve(source, create_if_missing=False)
            record.detail = source.full_name

        with self._step(report, MigrationStep.RESOLVE_DEST_REPO) as record:
            dest.node_id = await self.repos.resolve(
                dest, create_if_missing=self.create_repo
            )
            record.detail = dest.full_name

        with self._step(report, MigrationStep.COPY_LABELS) as record:
            labels = await self.labels.fetch(source)
            result = await self.labels.copy_all(labels, dest)
            report.labels_created = result.created
            report.labels_skipped = result.skipped
            record.detail = (
                f'{len(result.created)} created, {len(result.skipped)} already present'
            )

        with self._step(report, MigrationStep.COPY_ISSUES) as record:
            issues = await self.issues.fetch(source)
            report.issue_ids = await self.issues.copy_all(issues, dest)
            record.detail = f'{len(report.issue_ids)} issues'

        with self._step(report, MigrationStep.FETCH_SOURCE_PROJECT) as record:
            source_project = await self.projects.fetch_source_project(
                config.source_organization, config.source_project_number
            )
            record.detail = source_project.title

        with self._step(report, MigrationStep.COPY_PROJECT) as record:
            if config.dest_organization != config.source_organization:
                self.logger.warning(
                    f'Projects can only be copied within their organization; '
                    f'the copy is created in {config.source_organization}, '
                    f'not {config.dest_organization}'
                )
            self.logger.info(
                f'Copying project: {source_project.title} '
                f'under new name: {config.dest_project_name}'
            )
            project = await self.projects.copy_project(
                source_project.organization_id,
                source_project.project_id,
                config.dest_project_name,
            )
            report.project_id = project.id
            record.detail = project.title

        with self._step(report, MigrationStep.ATTACH_ISSUES) as record:
            attached = await self.linker.attach_issues(project.id, report.issue_ids)
            record.detail = f'{attached} issues'

        with self._step(report, MigrationStep.LINK_REPOSITORY) as record:
            await self.linker.link_repository(dest.node_id, project.id)
            record.detail = dest.full_name

    @contextmanager
    def _step(self, report: MigrationReport, step: MigrationStep) -> Iterator[StepRecord]:
        record = report.record(step)
        self.logger.debug(f'Starting step {step.value}')
        try:
            yield record
        except Exception:
            record.status = StepStatus.FAILED
            for r in report.steps:
                if r.status == StepStatus.PENDING:
                    r.status = StepStatus.SKIPPED
            raise
        record.status = StepStatus.COMPLETED

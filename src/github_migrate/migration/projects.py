"""Organization project copying and linking."""

from typing import Iterable

from loguru import logger

from ..api import queries
from ..api.client import GitHubClient
from ..models.project import Project, SourceProject
from .exceptions import ProjectNotFoundError


class ProjectCopier:
    """Duplicates an organization project under a new title.

    GitHub copies a project within the organization that owns it, so the
    copy is always created under the source project's organization.
    """

    def __init__(self, client: GitHubClient):
        self.client = client
        self.logger = logger.bind(component='ProjectCopier')

    async def fetch_source_project(self, organization: str, number: int) -> SourceProject:
        """Resolve a project by its number within ``organization``.

        Raises:
            ProjectNotFoundError: If the organization has no such project
        """
        data = await self.client.graphql_async(
            queries.GET_ORGANIZATION_PROJECT,
            {'login': organization, 'number': number},
        )
        org = data.get('organization') or {}
        project = org.get('projectV2')
        if not project:
            raise ProjectNotFoundError(organization, number)

        return SourceProject(
            organization_id=org['id'],
            project_id=project['id'],
            title=project['title'],
        )

    async def copy_project(
        self, organization_id: str, project_id: str, title: str
    ) -> Project:
        """Copy a project, draft issues included, and return the new one."""
        data = await self.client.graphql_async(
            queries.COPY_PROJECT,
            {
                'projectId': project_id,
                'ownerId': organization_id,
                'title': title,
                'includeDraftIssues': True,
            },
        )
        copied = data['copyProjectV2']['projectV2']
        return Project(id=copied['id'], title=copied.get('title') or title)


class ProjectLinker:
    """Attaches issues to a project and links the project to a repository."""

    def __init__(self, client: GitHubClient):
        self.client = client
        self.logger = logger.bind(component='ProjectLinker')

    async def attach_issues(self, project_id: str, issue_ids: Iterable[str]) -> int:
        """Add each issue to the project, one call per issue.

        A failure part way leaves the project partially populated.

        Returns:
            Number of issues attached
        """
        self.logger.info('Adding copied issues to project...')
        count = 0
        for issue_id in issue_ids:
            await self.client.graphql_async(
                queries.ADD_PROJECT_ITEM,
                {'projectId': project_id, 'contentId': issue_id},
            )
            count += 1
        return count

    async def link_repository(self, repo_id: str, project_id: str) -> None:
        self.logger.info('Linking repo to project...')
        await self.client.graphql_async(
            queries.LINK_PROJECT_TO_REPOSITORY,
            {'projectId': project_id, 'repositoryId': repo_id},
        )

"""Issue copying."""

from typing import Iterable, List

from loguru import logger

from ..api.client import GitHubClient
from ..models.issue import Issue
from ..models.repository import RepoRef


class IssueCopier:
    """Replicates issues into a destination repository."""

    def __init__(self, client: GitHubClient):
        self.client = client
        self.logger = logger.bind(component='IssueCopier')

    async def fetch(self, repo: RepoRef) -> List[Issue]:
        """List the source repository's issues, excluding pull requests."""
        items = await self.client.get_paginated_async(
            f'/repos/{repo.owner}/{repo.name}/issues'
        )
        return [Issue.from_api(item) for item in items if 'pull_request' not in item]

    async def copy_all(self, issues: Iterable[Issue], dest: RepoRef) -> List[str]:
        """Create one destination issue per source issue.

        Labels must already exist at ``dest``. The milestone number is sent
        as-is; a destination without it fails the whole run.

        Returns:
            Node IDs of the new issues, in input order
        """
        self.logger.info(f'copying issues to: {dest}')
        issue_ids = []

        for issue in issues:
            response = await self.client.post_async(
                f'/repos/{dest.owner}/{dest.name}/issues',
                data=issue.to_create_payload(),
            )
            issue_ids.append(response.data['node_id'])
            self.logger.debug(f'  Created issue #{response.data.get("number")}: {issue.title}')

        return issue_ids

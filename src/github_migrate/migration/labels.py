"""Label copying."""

from typing import Iterable, List

from loguru import logger
from pydantic import BaseModel, Field

from ..api.client import GitHubClient
from ..api.exceptions import GitHubConflictError
from ..models.label import Label
from ..models.repository import RepoRef


class LabelCopyResult(BaseModel):
    """Names of labels created and of labels that already existed."""

    created: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)


class LabelCopier:
    """Replicates labels into a destination repository.

    Existing labels are left untouched; nothing is ever deleted.
    """

    def __init__(self, client: GitHubClient):
        self.client = client
        self.logger = logger.bind(component='LabelCopier')

    async def fetch(self, repo: RepoRef) -> List[Label]:
        items = await self.client.get_paginated_async(
            f'/repos/{repo.owner}/{repo.name}/labels'
        )
        return [Label.from_api(item) for item in items]

    async def copy_all(self, labels: Iterable[Label], dest: RepoRef) -> LabelCopyResult:
        """Create each label at ``dest``, skipping names that already exist.

        Raises:
            GitHubAPIError: For any failure other than a name conflict
        """
        result = LabelCopyResult()
        self.logger.info('Copying labels...')

        for label in labels:
            try:
                await self.client.post_async(
                    f'/repos/{dest.owner}/{dest.name}/labels',
                    data=label.to_create_payload(),
                )
            except GitHubConflictError:
                self.logger.info(f'  Label has already been created: {label.name}')
                result.skipped.append(label.name)
                continue
            result.created.append(label.name)

        self.logger.info(
            f'Labels: {len(result.created)} created, {len(result.skipped)} already present'
        )
        return result

"""Repository lookup and creation."""

from loguru import logger

from ..api.client import GitHubClient
from ..api.exceptions import GitHubNotFoundError
from ..models.repository import RepoRef, RepositoryCreate
from .exceptions import RepositoryNotFoundError


class RepoResolver:
    """Finds repositories and, when allowed, creates missing ones."""

    def __init__(self, client: GitHubClient):
        self.client = client
        self.logger = logger.bind(component='RepoResolver')

    async def resolve(self, repo: RepoRef, create_if_missing: bool = False) -> str:
        """Return the node ID of ``repo``, creating it if permitted.

        Args:
            repo: Repository to look up
            create_if_missing: Create a private repository under the owner
                organization when the lookup reports not found

        Returns:
            Repository node ID

        Raises:
            RepositoryNotFoundError: If the repository is missing and
                ``create_if_missing`` is false
        """
        try:
            response = await self.client.get_async(f'/repos/{repo.owner}/{repo.name}')
            return response.data['node_id']
        except GitHubNotFoundError:
            self.logger.info(f'Repo does not exist: {repo}')

        if not create_if_missing:
            raise RepositoryNotFoundError(repo.owner, repo.name)

        self.logger.info(f'--create-repo flag selected, creating repo: {repo}')
        return await self.create(repo)

    async def create(self, repo: RepoRef) -> str:
        """Create a private repository with issues and projects enabled."""
        body = RepositoryCreate(name=repo.name)
        response = await self.client.post_async(
            f'/orgs/{repo.owner}/repos', data=body.dict()
        )
        return response.data['node_id']

"""Migration engine - main entry point for migration operations."""

from loguru import logger

from ..api.client import GitHubClient
from ..config.config import MigrationConfig
from .runner import MigrationReport, MigrationRunner


class MigrationEngine:
    """Owns the client for one run and hands it to the runner."""

    def __init__(self, config: MigrationConfig, token: str, create_repo: bool = False):
        """Initialize migration engine.

        Args:
            config: Migration configuration
            token: GitHub token used for every call
            create_repo: Create the destination repository when missing
        """
        self.config = config
        self.logger = logger.bind(component='MigrationEngine')

        self.client = GitHubClient(config.instance_config(token))
        self.runner = MigrationRunner(self.client, config, create_repo=create_repo)

    async def migrate(self) -> MigrationReport:
        """Run the migration.

        Returns:
            Migration report
        """
        self.logger.info(
            f'Migrating {self.config.source_organization}/{self.config.source_repo} '
            f'to {self.config.dest_organization}/{self.config.dest_repo}'
        )

        try:
            report = await self.runner.run()
            self.logger.info('Migration completed successfully')
            return report
        except Exception as e:
            self.logger.error(f'Migration failed: {e}')
            raise
        finally:
            self.client.close()

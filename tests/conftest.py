"""Shared fixtures: an in-memory stand-in for the GitHub API."""

import itertools
from typing import Any, Dict, List, Optional

import pytest

from github_migrate.api import queries
from github_migrate.api.client import APIResponse
from github_migrate.api.exceptions import (
    GitHubConflictError,
    GitHubNotFoundError,
    GitHubValidationError,
)
from github_migrate.config.config import MigrationConfig


class FakeGitHub:
    """Implements the client methods the migration uses, backed by dicts."""

    def __init__(self):
        self._ids = itertools.count(1)
        self.repos: Dict[tuple, Dict[str, Any]] = {}
        self.organizations: Dict[str, Dict[str, Any]] = {}
        self.projects: Dict[str, Dict[str, Any]] = {}
        self.calls: List[tuple] = []
        self.closed = False

    def _node_id(self, prefix: str) -> str:
        return f'{prefix}_{next(self._ids)}'

    # Seeding helpers

    def add_org(self, login: str) -> Dict[str, Any]:
        org = {'id': self._node_id('O'), 'login': login, 'projects': {}}
        self.organizations[login] = org
        return org

    def add_repo(
        self,
        owner: str,
        name: str,
        labels: Optional[List[Dict[str, Any]]] = None,
        issues: Optional[List[Dict[str, Any]]] = None,
        milestones: Optional[List[int]] = None,
    ) -> Dict[str, Any]:
        repo = {
            'node_id': self._node_id('R'),
            'owner': owner,
            'name': name,
            'private': False,
            'labels': {label['name']: dict(label) for label in labels or []},
            'issues': [],
            'milestones': set(milestones or []),
            'projects': [],
        }
        self.repos[(owner, name)] = repo
        for issue in issues or []:
            self._store_issue(repo, issue)
        return repo

    def add_project(
        self, org_login: str, number: int, title: str, drafts: int = 0
    ) -> Dict[str, Any]:
        org = self.organizations.get(org_login) or self.add_org(org_login)
        project = {
            'id': self._node_id('PVT'),
            'title': title,
            'owner_id': org['id'],
            'items': [f'draft-{i}' for i in range(drafts)],
            'repositories': [],
        }
        org['projects'][number] = project
        self.projects[project['id']] = project
        return project

    def _store_issue(self, repo: Dict[str, Any], issue: Dict[str, Any]) -> Dict[str, Any]:
        stored = dict(issue)
        stored.setdefault('node_id', self._node_id('I'))
        stored.setdefault('number', len(repo['issues']) + 1)
        repo['issues'].append(stored)
        return stored

    def _repo(self, owner: str, name: str) -> Dict[str, Any]:
        repo = self.repos.get((owner, name))
        if repo is None:
            raise GitHubNotFoundError('Resource not found', status_code=404)
        return repo

    # Client interface

    async def get_async(self, endpoint: str, params=None) -> APIResponse:
        self.calls.append(('GET', endpoint))
        parts = endpoint.strip('/').split('/')
        if parts[0] == 'repos' and len(parts) == 3:
            repo = self._repo(parts[1], parts[2])
            return APIResponse(
                status_code=200,
                data={'node_id': repo['node_id'], 'full_name': f'{parts[1]}/{parts[2]}'},
                headers={},
                success=True,
            )
        raise GitHubNotFoundError('Resource not found', status_code=404)

    async def get_paginated_async(self, endpoint: str, params=None, per_page=100):
        self.calls.append(('GET', endpoint))
        _, owner, name, kind = endpoint.strip('/').split('/')
        repo = self._repo(owner, name)
        if kind == 'labels':
            return [dict(label) for label in repo['labels'].values()]
        if kind == 'issues':
            return [dict(issue) for issue in repo['issues']]
        raise GitHubNotFoundError('Resource not found', status_code=404)

    async def post_async(self, endpoint: str, data=None) -> APIResponse:
        self.calls.append(('POST', endpoint))
        parts = endpoint.strip('/').split('/')

        if parts[0] == 'orgs' and parts[2] == 'repos':
            repo = self.add_repo(parts[1], data['name'])
            repo.update(
                private=data['private'],
                has_issues=data['has_issues'],
                has_projects=data['has_projects'],
            )
            return APIResponse(
                status_code=201, data={'node_id': repo['node_id']}, headers={}, success=True
            )

        repo = self._repo(parts[1], parts[2])

        if parts[3] == 'labels':
            if data['name'] in repo['labels']:
                raise GitHubConflictError(
                    'Resource already exists: Validation Failed',
                    status_code=422,
                    response_data={'errors': [{'code': 'already_exists'}]},
                )
            repo['labels'][data['name']] = dict(data)
            return APIResponse(status_code=201, data=dict(data), headers={}, success=True)

        if parts[3] == 'issues':
            missing = [name for name in data.get('labels', []) if name not in repo['labels']]
            milestone = data.get('milestone')
            if missing or (milestone is not None and milestone not in repo['milestones']):
                raise GitHubValidationError('Validation failed', status_code=422)
            stored = self._store_issue(repo, data)
            return APIResponse(
                status_code=201,
                data={'node_id': stored['node_id'], 'number': stored['number']},
                headers={},
                success=True,
            )

        raise GitHubNotFoundError('Resource not found', status_code=404)

    async def graphql_async(self, query: str, variables=None) -> Dict[str, Any]:
        variables = variables or {}
        self.calls.append(('GRAPHQL', query, dict(variables)))

        if query == queries.GET_ORGANIZATION_PROJECT:
            org = self.organizations.get(variables['login'])
            if org is None:
                raise GitHubNotFoundError('GraphQL: Could not resolve to an Organization')
            project = org['projects'].get(variables['number'])
            return {
                'organization': {
                    'id': org['id'],
                    'name': org['login'],
                    'projectV2': {'id': project['id'], 'title': project['title']}
                    if project
                    else None,
                }
            }

        if query == queries.COPY_PROJECT:
            source = self.projects[variables['projectId']]
            copy = {
                'id': self._node_id('PVT'),
                'title': variables['title'],
                'owner_id': variables['ownerId'],
                'items': list(source['items']) if variables['includeDraftIssues'] else [],
                'repositories': [],
            }
            self.projects[copy['id']] = copy
            return {'copyProjectV2': {'projectV2': {'id': copy['id'], 'title': copy['title']}}}

        if query == queries.ADD_PROJECT_ITEM:
            self.projects[variables['projectId']]['items'].append(variables['contentId'])
            return {'addProjectV2ItemById': {'item': {'id': self._node_id('PVTI')}}}

        if query == queries.LINK_PROJECT_TO_REPOSITORY:
            project = self.projects[variables['projectId']]
            project['repositories'].append(variables['repositoryId'])
            return {'linkProjectV2ToRepository': {'repository': {'id': variables['repositoryId']}}}

        raise AssertionError(f'Unexpected query: {query}')

    def test_connection(self) -> bool:
        return True

    def close(self):
        self.closed = True

    # Assertion helpers

    def writes(self) -> List[tuple]:
        return [c for c in self.calls if c[0] in ('POST', 'GRAPHQL') and c[1] != queries.GET_ORGANIZATION_PROJECT]


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def migration_config():
    return MigrationConfig(
        source_organization='orgA',
        source_repo='repoA',
        source_project_number=3,
        dest_organization='orgB',
        dest_repo='repoB',
        dest_project_name='Copied board',
    )


@pytest.fixture
def seeded(github):
    """Source orgA/repoA with 2 labels, 3 issues and project 3."""
    github.add_org('orgA')
    github.add_org('orgB')
    github.add_repo(
        'orgA',
        'repoA',
        labels=[
            {'name': 'bug', 'color': 'd73a4a', 'description': "Something isn't working"},
            {'name': 'enhancement', 'color': 'a2eeef', 'description': None},
        ],
        issues=[
            {'title': 'First', 'body': 'one', 'labels': [{'name': 'bug'}], 'milestone': None},
            {'title': 'Second', 'body': 'two', 'labels': [], 'milestone': None},
            {
                'title': 'Third',
                'body': None,
                'labels': [{'name': 'bug'}, {'name': 'enhancement'}],
                'milestone': None,
            },
        ],
    )
    github.add_project('orgA', 3, 'Roadmap', drafts=2)
    return github

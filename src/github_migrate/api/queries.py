"""GraphQL documents used by the migration.

Every value is bound as a variable; nothing is interpolated into the text.
"""

GET_ORGANIZATION_PROJECT = """
query($login: String!, $number: Int!) {
  organization(login: $login) {
    id
    name
    projectV2(number: $number) {
      id
      title
    }
  }
}
"""

COPY_PROJECT = """
mutation($projectId: ID!, $ownerId: ID!, $title: String!, $includeDraftIssues: Boolean!) {
  copyProjectV2(input: {
    projectId: $projectId,
    ownerId: $ownerId,
    title: $title,
    includeDraftIssues: $includeDraftIssues
  }) {
    projectV2 { id title }
  }
}
"""

ADD_PROJECT_ITEM = """
mutation($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(input: {projectId: $projectId, contentId: $contentId}) {
    item { id }
  }
}
"""

LINK_PROJECT_TO_REPOSITORY = """
mutation($projectId: ID!, $repositoryId: ID!) {
  linkProjectV2ToRepository(input: {projectId: $projectId, repositoryId: $repositoryId}) {
    repository { id }
  }
}
"""

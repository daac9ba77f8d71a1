"""
GitHub GraphQL client.

Fetches the homepage URL and the latest default-branch commit date of a
repository. Absent fields come back as None; transport and API errors are
raised to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

log = logging.getLogger(__name__)

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"

REPO_INFO_QUERY = """
query GetRepoInfo($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    homepageUrl
    defaultBranchRef {
      target {
        ... on Commit {
          committedDate
        }
      }
    }
  }
}
"""


class GitHubGraphQLError(Exception):
    """The API answered, but with an ``errors`` payload."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__("; ".join(messages) or "Unknown GraphQL error")


@dataclass
class RepoInfo:
    homepage_url: Optional[str] = None
    committed_date: Optional[str] = None


def parse_repo_info(data: dict) -> RepoInfo:
    """Pull the two fields out of a ``data`` payload, tolerating missing nodes."""
    repo = (data or {}).get("repository") or {}
    branch = repo.get("defaultBranchRef") or {}
    target = branch.get("target") or {}
    return RepoInfo(
        homepage_url=repo.get("homepageUrl") or None,
        committed_date=target.get("committedDate") or None,
    )


class GitHubClient:
    def __init__(self, token: str, endpoint: str = GITHUB_GRAPHQL_URL,
                 timeout: int = 30, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"bearer {token}",
            "Content-Type": "application/json",
        })

    def query(self, query: str, variables: dict) -> dict:
        resp = self.session.post(
            self.endpoint,
            json={"query": query, "variables": variables},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        body = resp.json()

        errors = body.get("errors") or []
        if errors:
            raise GitHubGraphQLError([e.get("message", str(e)) for e in errors])
        return body.get("data") or {}

    def fetch_repo_info(self, owner: str, name: str) -> RepoInfo:
        log.debug(f"Querying {owner}/{name}")
        data = self.query(REPO_INFO_QUERY, {"owner": owner, "name": name})
        return parse_repo_info(data)

    def close(self):
        self.session.close()

from .client import GitHubAPIError, GitHubResponse, GitHubRestClient

__all__ = ["GitHubAPIError", "GitHubResponse", "GitHubRestClient"]

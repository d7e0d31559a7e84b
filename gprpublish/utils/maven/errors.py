"""
Error types raised while publishing to a Maven repository.

Every error is fatal for a run. The command layer prints the message and
exits with ``exit_code``.
"""


class PublishError(Exception):
    """Base class for publishing failures."""

    exit_code = 1
    hint = ""

    def __init__(self, message: str, hint: str = ""):
        super().__init__(message)
        if hint:
            self.hint = hint


class ConfigurationError(PublishError):
    """Properties file missing or unreadable, required key absent, or bad config."""

    exit_code = 2
    hint = "Check the properties file and publish.toml in the project root"


class ArtifactNotFoundError(PublishError):
    """The declared artifact file does not exist at publish time."""

    exit_code = 3
    hint = "Rebuild the artifact or fix the 'artifact' path"


class AuthenticationError(PublishError):
    """The registry rejected the credentials (HTTP 401/403)."""

    exit_code = 4
    hint = "Check gpr.usr and gpr.key; the token needs the write:packages scope"

    def __init__(self, message: str, status_code: int = 0, hint: str = ""):
        super().__init__(message, hint)
        self.status_code = status_code


class PublishConflictError(PublishError):
    """The registry already holds this version (HTTP 409)."""

    exit_code = 5
    hint = "Bump the version before publishing again"


class NetworkError(PublishError):
    """The registry could not be reached."""

    exit_code = 6
    hint = "Check the network connection and the repository URL"

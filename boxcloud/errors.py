"""Exception hierarchy for boxcloud.

Every failure a publishing step can detect is raised as a ``BoxCloudError``
subclass.  ``BaseStep.run()`` converts the exception into the run's terminal
error; the runner never inspects it further and the publisher re-raises it
verbatim to the caller.
"""

from __future__ import annotations


class BoxCloudError(RuntimeError):
    """Base class for all boxcloud errors."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(BoxCloudError):
    """Raised when required settings are missing or malformed.

    Detected before the pipeline starts, never inside a step.  All problems
    are accumulated so the user can fix them in one pass.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class TemplateRenderError(BoxCloudError):
    """Raised when the box download URL template cannot be rendered."""


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


class PreconditionError(BoxCloudError):
    """A local or remote precondition for publishing is not satisfied."""


class InvalidArtifactError(PreconditionError):
    """The artifact file does not have the expected ``.box`` extension."""


class ArtifactNotFoundError(PreconditionError):
    """The artifact file does not exist on the local file system."""


class BoxNotFoundError(PreconditionError):
    """The box tag does not exist on the registry."""


class VersionReleasedError(PreconditionError):
    """The target version is already released and cannot be mutated."""


class VersionRevokedError(PreconditionError):
    """The target version was revoked on the registry and cannot be reused."""


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class RegistryError(BoxCloudError):
    """A registry call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RegistryAuthError(RegistryError):
    """The access token was rejected."""


class RegistryNotFoundError(RegistryError):
    """The requested registry resource does not exist."""


class RegistryServerError(RegistryError):
    """The registry answered with a 5xx status."""


# ---------------------------------------------------------------------------
# Run outcome
# ---------------------------------------------------------------------------


class PublishCancelledError(BoxCloudError):
    """Raised by the publisher when the run was cancelled before completion."""

"""boxcloud: publish locally built Vagrant boxes to a box registry.

A small step-based workflow drives the registry through a fixed sequence:
verify the version, create it, attach the provider, upload the box (unless
it is self-hosted) and release it.
"""

__version__ = "0.1.0"

from boxcloud.core.publisher import BoxPublisher, build_steps
from boxcloud.core.runner import StepRunner
from boxcloud.core.state import PublishState
from boxcloud.models.artifacts import BoxArtifact
from boxcloud.models.config import PublishConfig

__all__ = [
    "BoxPublisher",
    "BoxArtifact",
    "PublishConfig",
    "PublishState",
    "StepRunner",
    "build_steps",
    "__version__",
]

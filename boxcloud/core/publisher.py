"""Box publisher — assembles and runs the publishing pipeline.

The publisher wires the registry client, the output sink, the download URL
renderer and the step runner into a single ``publish()`` call:

    check artifact -> build client -> render URL -> seed state
        -> build_steps() -> StepRunner.run() -> surface error or result

The step sequence is chosen once, before the run, from the rendered
download URL alone.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from boxcloud.client.protocol import RegistryClient
from boxcloud.client.vagrant_cloud import DEFAULT_TIMEOUT, VagrantCloudClient
from boxcloud.config import ATLAS_TOKEN_WARNING
from boxcloud.core.runner import StepRunner
from boxcloud.core.state import PublishState
from boxcloud.core.templating import render_download_url
from boxcloud.errors import PublishCancelledError
from boxcloud.models.artifacts import BoxArtifact, SourceArtifact
from boxcloud.models.config import PublishConfig
from boxcloud.models.runs import RunnerState, RunReport
from boxcloud.steps import (
    HOSTED_STEP_ORDER,
    SELF_HOSTED_STEP_ORDER,
    BaseStep,
    check_artifact_file,
    get_step,
)
from boxcloud.ui import Ui

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, str, float], RegistryClient]


def build_steps(box_download_url: str) -> list[BaseStep]:
    """Return the step sequence for a run.

    A non-empty download URL means the bytes are hosted elsewhere, so the
    upload steps are left out entirely.
    """
    order = SELF_HOSTED_STEP_ORDER if box_download_url else HOSTED_STEP_ORDER
    return [get_step(step_id) for step_id in order]


def _default_client_factory(base_url: str, access_token: str, timeout: float) -> RegistryClient:
    return VagrantCloudClient(base_url, access_token, timeout=timeout)


class BoxPublisher:
    """Publishes one box version to the registry.

    Parameters
    ----------
    config:
        Validated publish configuration.
    warn_atlas_token:
        Emit the legacy-token warning through the UI (set when the token was
        discovered in ``ATLAS_TOKEN``).
    client:
        Registry client to use.  When omitted one is built by
        *client_factory* from the config.
    client_factory:
        ``(base_url, access_token, timeout) -> RegistryClient``.
    timeout:
        Request timeout passed to the client factory.
    """

    def __init__(
        self,
        config: PublishConfig,
        *,
        warn_atlas_token: bool = False,
        client: RegistryClient | None = None,
        client_factory: ClientFactory | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        config.validate_required()
        self.config = config
        self.warn_atlas_token = warn_atlas_token
        self._client = client
        self._client_factory = client_factory or _default_client_factory
        self._timeout = timeout

        self._lock = threading.Lock()
        self._runner: StepRunner | None = None
        self._cancel_requested = False
        self.last_report: RunReport | None = None

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    def publish(self, ui: Ui, artifact: SourceArtifact) -> BoxArtifact:
        """Run the pipeline for *artifact* and return the published identity.

        Raises the first error recorded by a step verbatim, or
        ``PublishCancelledError`` if the run was cancelled.
        """
        config = self.config
        artifact_path = check_artifact_file(config.artifact_path)

        if self.warn_atlas_token:
            ui.message(ATLAS_TOKEN_WARNING)

        client = self._client or self._client_factory(
            config.vagrant_cloud_url, config.access_token, self._timeout
        )

        box_download_url = render_download_url(
            config.box_download_url,
            artifact_id=artifact.id,
            provider=config.provider,
        )

        state = PublishState(
            config=config,
            client=client,
            ui=ui,
            artifact_id=artifact.id,
            artifact_path=artifact_path,
            provider_name=config.provider,
            box_download_url=box_download_url,
        )

        steps = build_steps(box_download_url)
        runner = StepRunner(steps)
        with self._lock:
            self._runner = runner
            if self._cancel_requested:
                runner.cancel()

        logger.info(
            "Publishing %s %s (%s) with %d steps",
            config.box_tag,
            config.version,
            config.provider,
            len(steps),
        )
        try:
            report = runner.run(state)
        finally:
            with self._lock:
                self._runner = None
                self._cancel_requested = False
        self.last_report = report

        if state.error is not None:
            raise state.error
        if report.state == RunnerState.CANCELLED:
            raise PublishCancelledError(
                f"Publishing {config.box_tag} {config.version} was cancelled"
            )

        return BoxArtifact(provider_name=config.provider, box_tag=config.box_tag)

    def cancel(self) -> None:
        """Stop the run at the next step boundary.  Safe from any thread."""
        with self._lock:
            self._cancel_requested = True
            runner = self._runner
        if runner is not None:
            logger.info("Cancelling the step runner...")
            runner.cancel()

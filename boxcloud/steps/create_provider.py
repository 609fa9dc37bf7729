"""CreateProvider — attach a provider entry to the version."""

from __future__ import annotations

import logging

from boxcloud.core.state import PublishState
from boxcloud.models.runs import StepAction
from boxcloud.steps.base import BaseStep

logger = logging.getLogger(__name__)


class CreateProviderStep(BaseStep):
    """Create the provider for (version, provider name) unless it exists.

    For self-hosted boxes the rendered download URL is sent along so the
    registry only stores a pointer.
    """

    @property
    def step_id(self) -> str:
        return "create_provider"

    @property
    def display_name(self) -> str:
        return "Create Provider"

    def execute(self, state: PublishState) -> StepAction:
        config = state.config
        name = state.provider_name

        # Providers listed on the fetched version need no extra lookup.
        existing = state.version.find_provider(name) if state.version is not None else None
        if existing is None:
            existing = state.client.get_provider(config.box_tag, config.version, name)
        if existing is not None:
            self.message(state, f"Provider exists, reusing: {name}")
            if state.box_download_url and existing.original_url != state.box_download_url:
                logger.warning(
                    "Existing provider %s points at %s, not %s",
                    name,
                    existing.original_url,
                    state.box_download_url,
                )
            state.provider = existing
            return StepAction.CONTINUE

        self.say(state, f"Creating provider: {name}")
        state.provider = state.client.create_provider(
            config.box_tag,
            config.version,
            name,
            url=state.box_download_url or None,
        )
        state.provider_created = True
        return StepAction.CONTINUE

    def cleanup(self, state: PublishState) -> None:
        if state.provider_created and (state.failed or state.cancelled):
            self.message(
                state,
                f"Provider {state.provider_name} was left on version "
                f"{state.config.version}; re-run to resume publishing",
            )

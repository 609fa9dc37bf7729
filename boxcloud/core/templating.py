"""Rendering of the self-hosted box download URL.

The template may reference ``{artifact_id}`` and ``{provider}``; any other
placeholder is an error so a typo never produces a silently broken URL.
Templates written for the Packer post-processor, which use
``{{ .ArtifactId }}`` and ``{{ .Provider }}``, render the same way.
"""

from __future__ import annotations

import re

from boxcloud.errors import TemplateRenderError

# The double-brace form is tried first so its outer braces are not read as
# a single-brace placeholder.
_PLACEHOLDER = re.compile(r"\{\{\s*\.([A-Za-z_]\w*)\s*\}\}|\{([^{}]*)\}")

_LEGACY_NAMES = {
    "ArtifactId": "artifact_id",
    "Provider": "provider",
}


def render_download_url(template: str, *, artifact_id: str, provider: str) -> str:
    """Render *template* for the given artifact and provider.

    An empty template renders to an empty string (registry-hosted box).
    """
    if not template:
        return ""

    context = {
        "artifact_id": artifact_id,
        "provider": provider,
    }

    def _substitute(match: re.Match[str]) -> str:
        legacy = match.group(1)
        if legacy is not None:
            if legacy not in _LEGACY_NAMES:
                raise TemplateRenderError(
                    f"Error processing box_download_url: unknown placeholder "
                    f"{{{{ .{legacy} }}}}, expected one of {sorted(_LEGACY_NAMES)}"
                )
            return context[_LEGACY_NAMES[legacy]]

        key = match.group(2).strip()
        if key not in context:
            raise TemplateRenderError(
                f"Error processing box_download_url: unknown placeholder "
                f"{{{key}}}, expected one of {sorted(context)}"
            )
        return context[key]

    rendered = _PLACEHOLDER.sub(_substitute, template)
    if "{" in rendered or "}" in rendered:
        raise TemplateRenderError(
            f"Error processing box_download_url: unbalanced braces in {template!r}"
        )
    return rendered

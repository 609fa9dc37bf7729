"""Tests for the box download URL renderer."""

from __future__ import annotations

import pytest

from boxcloud.core.templating import render_download_url
from boxcloud.errors import TemplateRenderError


class TestRenderDownloadUrl:
    def test_empty_template(self):
        assert render_download_url("", artifact_id="a", provider="p") == ""

    def test_plain_url_unchanged(self):
        url = "https://dl.example.test/box.box"
        assert render_download_url(url, artifact_id="a", provider="p") == url

    def test_substitutes_placeholders(self):
        rendered = render_download_url(
            "https://dl.example.test/{provider}/{artifact_id}.box",
            artifact_id="centos-7",
            provider="libvirt",
        )
        assert rendered == "https://dl.example.test/libvirt/centos-7.box"

    def test_whitespace_inside_braces(self):
        rendered = render_download_url("x/{ provider }", artifact_id="a", provider="vmware")
        assert rendered == "x/vmware"

    def test_unknown_placeholder(self):
        with pytest.raises(TemplateRenderError, match="unknown placeholder"):
            render_download_url("x/{version}", artifact_id="a", provider="p")

    def test_unbalanced_braces(self):
        with pytest.raises(TemplateRenderError, match="unbalanced"):
            render_download_url("x/{provider", artifact_id="a", provider="p")

    def test_packer_style_placeholders(self):
        rendered = render_download_url(
            "https://dl.example.test/{{ .Provider }}/{{.ArtifactId}}.box",
            artifact_id="centos-7",
            provider="libvirt",
        )
        assert rendered == "https://dl.example.test/libvirt/centos-7.box"

    def test_mixed_placeholder_styles(self):
        rendered = render_download_url(
            "x/{{ .Provider }}/{artifact_id}", artifact_id="a", provider="p"
        )
        assert rendered == "x/p/a"

    def test_unknown_packer_style_placeholder(self):
        with pytest.raises(TemplateRenderError, match=r"\{\{ \.BuildName \}\}"):
            render_download_url("x/{{ .BuildName }}", artifact_id="a", provider="p")

    def test_double_braces_without_dot_are_rejected(self):
        with pytest.raises(TemplateRenderError, match="unbalanced"):
            render_download_url("x/{{provider}}", artifact_id="a", provider="p")

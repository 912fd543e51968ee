"""Tests for httpd-vhosts.conf composition."""

from __future__ import annotations

from pathlib import Path

import pytest

from xtools_common import SiteDefinition, XamppConfig
from xtools.errors import BlocksTemplateNotFoundError, TemplateValidationError
from xtools.services.env_store import parse_env
from xtools.services.site_registry import resolve_site
from xtools.services.template_engine import apache_path
from xtools.services.vhost_composer import compose, load_blocks_template, render_redirect


@pytest.fixture
def sites(tmp_config: XamppConfig) -> list[SiteDefinition]:
    (tmp_config.docroot / "blog").mkdir()
    (tmp_config.docroot / "shop" / "public").mkdir(parents=True)
    return [
        SiteDefinition(folder="blog", type="wordpress"),
        SiteDefinition(folder="shop", type="laravel", ssl=True),
        SiteDefinition(folder="ghost", type="static"),
    ]


class TestCompose:
    def test_end_to_end(self, tmp_config, blocks_text, sites, frozen_now):
        result = compose(sites, tmp_config, {}, blocks_text, now=frozen_now)

        assert result.generated == 2
        assert [s.site.folder for s in result.skipped] == ["ghost"]
        assert result.unresolved == []

        text = result.text
        assert "Generated by xtools on 2026-01-02 03:04:05" in text
        assert "Sites: 2" in text
        assert "ServerName localhost" in text
        assert "ServerName blog.local" in text
        assert "ServerName shop.local" in text
        assert "ghost" not in text
        assert "ErrorLog" not in text
        assert f'DocumentRoot "{apache_path(tmp_config.docroot / "shop" / "public")}"' in text
        assert text.endswith("</VirtualHost>\n")

    def test_env_port_flows_into_site_block(self, tmp_path, blocks_text, frozen_now):
        docroot = tmp_path / "htdocs"
        (docroot / "blog").mkdir(parents=True)
        env = parse_env(
            f"XAMPP_ROOT_DIR={tmp_path / 'xampp'}\n"
            f"XAMPP_DOCUMENT_ROOT={docroot}\n"
            "XAMPP_SERVER_PORT=8080\n"
            "VHOSTS_EXTENSION=.local\n"
        )
        cfg = XamppConfig.from_env(env, tmp_path / "tools")
        sites = [SiteDefinition(folder="blog", type="wordpress")]

        result = compose(sites, cfg, env, blocks_text, now=frozen_now)

        assert result.generated == 1
        assert result.skipped == []
        assert "<VirtualHost *:8080>\n    ServerName blog.local" in result.text
        assert "<VirtualHost *:80>" not in result.text

    def test_missing_folder_leaves_only_default(self, tmp_path, blocks_text, frozen_now):
        docroot = tmp_path / "htdocs"
        docroot.mkdir()
        env = parse_env(f"XAMPP_DOCUMENT_ROOT={docroot}\nXAMPP_SERVER_PORT=8080\n")
        cfg = XamppConfig.from_env(env, tmp_path / "tools")
        sites = [SiteDefinition(folder="blog", type="wordpress")]

        result = compose(sites, cfg, env, blocks_text, now=frozen_now)

        assert result.generated == 0
        assert [s.site.folder for s in result.skipped] == ["blog"]
        assert result.text.count("<VirtualHost") == 1
        assert "ServerName localhost" in result.text
        assert "blog.local" not in result.text
        assert "Sites: 0" in result.text

    def test_site_order_follows_list(self, tmp_config, blocks_text, sites, frozen_now):
        text = compose(sites, tmp_config, {}, blocks_text, now=frozen_now).text
        assert text.index("ServerName localhost") < text.index("blog.local") < text.index("shop.local")

    def test_ssl_site_gets_redirect_then_block(self, tmp_config, blocks_text, sites, frozen_now):
        text = compose(sites, tmp_config, {}, blocks_text, now=frozen_now).text
        redirect = (
            "<VirtualHost *:80>\n"
            "    ServerName shop.local\n"
            "    Redirect permanent / https://shop.local/\n"
            "</VirtualHost>"
        )
        assert redirect in text
        assert text.index(redirect) < text.index("<VirtualHost *:443>")
        assert f'SSLCertificateFile "{apache_path(tmp_config.certs / "shop.local.crt")}"' in text

    def test_custom_ssl_port_in_redirect(self, tmp_config, blocks_text, frozen_now):
        (tmp_config.docroot / "api" / "public").mkdir(parents=True)
        site = SiteDefinition.model_validate(
            {"folder": "api", "type": "laravel", "ssl": True, "sslPort": 8443}
        )
        text = compose([site], tmp_config, {}, blocks_text, now=frozen_now).text
        assert "Redirect permanent / https://api.local:8443/" in text
        assert "<VirtualHost *:8443>" in text

    def test_log_sections_kept_when_log_dir_exists(self, tmp_config, blocks_text, sites, frozen_now):
        log_dir = tmp_config.docroot / "blog" / "logs"
        log_dir.mkdir()
        text = compose(sites, tmp_config, {}, blocks_text, now=frozen_now).text
        assert f'ErrorLog "{apache_path(log_dir)}/error.log"' in text
        assert text.count("ErrorLog") == 1
        assert "IF_LOG_DIR" not in text

    def test_missing_block_skips_site(self, tmp_config, blocks_text, frozen_now):
        (tmp_config.docroot / "spa").mkdir()
        (tmp_config.docroot / "blog").mkdir()
        sites = [
            SiteDefinition(folder="spa", type="react"),
            SiteDefinition(folder="blog", type="wordpress", ssl=True),
        ]
        result = compose(sites, tmp_config, {}, blocks_text, now=frozen_now)
        assert result.generated == 0
        assert result.skipped == []
        assert "spa.local" not in result.text
        assert "Sites: 0" in result.text
        assert "blog.local" not in result.text
        assert "Redirect" not in result.text

    def test_no_sites(self, tmp_config, blocks_text, frozen_now):
        result = compose([], tmp_config, {}, blocks_text, now=frozen_now)
        assert result.generated == 0
        assert "Sites: 0" in result.text
        assert "ServerName localhost" in result.text

    def test_without_default_block(self, tmp_config, sites, frozen_now):
        blocks = "## App:WordPress HTTPS:false\nServerName {{SERVER_NAME}}\n"
        result = compose(sites, tmp_config, {}, blocks, now=frozen_now)
        assert "localhost" not in result.text
        assert "ServerName blog.local" in result.text

    def test_is_idempotent(self, tmp_config, blocks_text, sites, frozen_now):
        first = compose(sites, tmp_config, {}, blocks_text, now=frozen_now)
        second = compose(sites, tmp_config, {}, blocks_text, now=frozen_now)
        assert first.text == second.text

    def test_env_values_are_substituted(self, tmp_config, frozen_now):
        blocks = "## App:Default HTTPS:false\nServerAdmin {{ADMIN_EMAIL}}\n"
        result = compose([], tmp_config, {"ADMIN_EMAIL": "dev@example.test"}, blocks, now=frozen_now)
        assert "ServerAdmin dev@example.test" in result.text

    def test_unresolved_are_reported(self, tmp_config, frozen_now):
        blocks = "## App:Default HTTPS:false\nServerAdmin {{ADMIN_EMAIL}}\n"
        result = compose([], tmp_config, {}, blocks, now=frozen_now)
        assert "{{ADMIN_EMAIL}}" in result.text
        assert result.unresolved == ["ADMIN_EMAIL"]

    def test_unbalanced_markers(self, tmp_config, blocks_text, frozen_now):
        with pytest.raises(TemplateValidationError):
            compose([], tmp_config, {}, blocks_text + "{{#IF_LOG_DIR}}\n", now=frozen_now)


class TestRedirect:
    def test_default_ssl_port_is_omitted(self, tmp_config):
        site = resolve_site(SiteDefinition(folder="a", ssl=True), tmp_config)
        assert "https://a.local/" in render_redirect(site)

    def test_custom_http_port(self, tmp_config):
        site = resolve_site(SiteDefinition(folder="a", ssl=True, port=8080), tmp_config)
        assert "<VirtualHost *:8080>" in render_redirect(site)


class TestLoadBlocksTemplate:
    def test_missing(self, tmp_path: Path):
        with pytest.raises(BlocksTemplateNotFoundError):
            load_blocks_template(tmp_path / "nope.conf")

    def test_unbalanced(self, tmp_path: Path):
        path = tmp_path / "blocks.conf"
        path.write_text("## App:Default HTTPS:false\n{{#IF_LOG_DIR}}\n")
        with pytest.raises(TemplateValidationError):
            load_blocks_template(path)

    def test_reads(self, tmp_path: Path, blocks_text):
        path = tmp_path / "blocks.conf"
        path.write_text(blocks_text)
        assert load_blocks_template(path) == blocks_text

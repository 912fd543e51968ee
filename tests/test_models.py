"""Tests for shared Pydantic models."""

from __future__ import annotations

import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from xtools_common import AppType, AuditEvent, SiteDefinition, derive_server_name


class TestSiteDefinition:
    def test_defaults(self):
        site = SiteDefinition(folder="blog")
        assert site.type is AppType.STATIC
        assert site.ssl is False
        assert site.port is None
        assert site.ssl_port is None
        assert site.server_name is None

    def test_folder_is_required(self):
        with pytest.raises(ValidationError):
            SiteDefinition.model_validate({"name": "No folder"})

    def test_json_aliases(self):
        site = SiteDefinition.model_validate(
            {"folder": "shop", "serverName": "shop.test", "sslPort": 8443, "type": "laravel"}
        )
        assert site.server_name == "shop.test"
        assert site.ssl_port == 8443
        assert site.type is AppType.LARAVEL

    def test_unknown_type_falls_back_to_static(self):
        assert SiteDefinition(folder="x", type="django").type is AppType.STATIC

    def test_type_is_case_insensitive(self):
        assert SiteDefinition(folder="x", type="WordPress").type is AppType.WORDPRESS

    @pytest.mark.parametrize(
        "data, expected",
        [
            ({"ssl": True}, True),
            ({"ssl": "true"}, True),
            ({"ssl": "false"}, False),
            ({"https": True}, True),
            ({"https": "true"}, True),
            ({"ssl": False, "https": "true"}, True),
            ({}, False),
        ],
    )
    def test_ssl_normalization(self, data, expected):
        site = SiteDefinition.model_validate({"folder": "x", **data})
        assert site.ssl is expected

    def test_uncastable_port_falls_back(self):
        site = SiteDefinition.model_validate({"folder": "x", "port": "abc", "sslPort": "8443"})
        assert site.port is None
        assert site.ssl_port == 8443

    def test_is_immutable(self):
        site = SiteDefinition(folder="x")
        with pytest.raises(ValidationError):
            site.folder = "y"

    def test_name_defaults_to_server_name(self):
        assert SiteDefinition(folder="blog").display_name(".local") == "blog.local"
        assert SiteDefinition(folder="blog", name="My Blog").display_name(".local") == "My Blog"


class TestServerNameDerivation:
    def test_plain_folder(self):
        assert derive_server_name("my-app", ".local") == "my-app.local"

    def test_trailing_extension_is_stripped(self):
        assert derive_server_name("site.old", ".local") == "site.local"

    def test_only_last_extension_is_stripped(self):
        assert derive_server_name("a.b.c", ".local") == "a.b.local"

    def test_dot_and_empty_are_localhost(self):
        assert derive_server_name(".", ".local") == "localhost"
        assert derive_server_name("", ".local") == "localhost"

    def test_explicit_server_name_wins(self):
        site = SiteDefinition(folder="my-app", serverName="custom.dev")
        assert site.resolved_server_name(".local") == "custom.dev"


class TestAppType:
    def test_labels(self):
        assert AppType.LARAVEL.label == "Laravel"
        assert AppType.REACT.label == "React"
        assert AppType.WORDPRESS.label == "WordPress"
        assert AppType.STATIC.label == "Static"


class TestAuditEvent:
    def test_defaults(self):
        event = AuditEvent(action="build", target="C:/xampp")
        assert event.result == "success"
        assert event.error is None
        assert isinstance(event.timestamp, datetime)

    def test_to_jsonl(self):
        event = AuditEvent(action="db.backup", target="shop", actor="dev", params={"file": "x.gz"})
        data = json.loads(event.to_jsonl())
        assert data["action"] == "db.backup"
        assert data["params"]["file"] == "x.gz"

"""Tests for renew.utils name helpers and console output."""

from __future__ import annotations

import pytest

from renew import utils
from renew.utils import camelize, elixir_atom

pytestmark = pytest.mark.unit


class TestCamelize:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("shop", "Shop"),
            ("hello_world", "HelloWorld"),
            ("shop/api", "Shop.Api"),
            ("my_app/web_api", "MyApp.WebApi"),
            ("app2", "App2"),
            ("double__underscore", "DoubleUnderscore"),
        ],
    )
    def test_camelize(self, value, expected):
        assert camelize(value) == expected


class TestElixirAtom:
    def test_adds_colon(self):
        assert elixir_atom("shop") == ":shop"

    def test_keeps_existing_colon(self):
        assert elixir_atom(":shop") == ":shop"


class TestOutput:
    def test_print_error_prefix(self, capsys):
        utils.print_error("boom")
        assert "Error: boom" in capsys.readouterr().out

    def test_print_operation(self, capsys):
        utils.print_operation("creating", "lib/shop.ex")
        out = capsys.readouterr().out
        assert "* creating" in out
        assert "lib/shop.ex" in out

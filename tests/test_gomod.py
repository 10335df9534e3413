"""
Tests for the go.mod reader and module path derivation.
"""

import pytest

from pkg_cmd.core.init.gomod import module_path_from_remote, parse_go_mod
from pkg_cmd.core.init.models import GoModule


class TestParseGoMod:
    """Tests for parse_go_mod."""

    def test_reads_module_and_version(self):
        text = "module example.com/foo\ngo 1.20\nunrelated line\n"
        assert parse_go_mod(text) == GoModule(module="example.com/foo", go="1.20")

    def test_empty_text(self):
        assert parse_go_mod("") == GoModule(module="", go="")

    def test_ignores_require_blocks(self):
        text = (
            "module github.com/acme/widget\n"
            "\n"
            "go 1.21\n"
            "\n"
            "require (\n"
            "\tgithub.com/stretchr/testify v1.8.4\n"
            ")\n"
        )
        parsed = parse_go_mod(text)
        assert parsed.module == "github.com/acme/widget"
        assert parsed.go == "1.21"

    def test_trims_whitespace(self):
        assert parse_go_mod("module   example.com/foo  \r\n").module == "example.com/foo"

    def test_prefix_must_start_the_line(self):
        parsed = parse_go_mod("  module example.com/foo\n// go 1.20\n")
        assert parsed == GoModule()

    def test_parsing_is_repeatable(self):
        text = "module example.com/foo\ngo 1.20\n"
        assert parse_go_mod(text) == parse_go_mod(text)


class TestModulePathFromRemote:
    """Tests for module_path_from_remote."""

    @pytest.mark.parametrize(
        ("remote", "expected"),
        [
            ("https://github.com/acme/widget", "github.com/acme/widget"),
            ("ssh://git@github.com/acme/widget.git", "git@github.com/acme/widget.git"),
            ("git@github.com:acme/widget.git", "git@github.com:acme/widget.git"),
            ("github.com/acme/widget", "github.com/acme/widget"),
        ],
    )
    def test_strips_scheme_only(self, remote, expected):
        assert module_path_from_remote(remote) == expected

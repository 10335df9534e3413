"""
Tests for README rendering.
"""

from pkg_cmd.core.init.models import Language
from pkg_cmd.core.init.readme import ReadmeContext, render_readme


def _context(**overrides):
    values = {
        "name": "widget",
        "description": "Makes widgets",
        "license_name": "MIT License",
    }
    values.update(overrides)
    return ReadmeContext(**values)


class TestRenderReadme:
    """Tests for render_readme."""

    def test_node_readme(self):
        readme = render_readme(Language.NODE, _context())

        assert readme.startswith("# widget\n\n> Makes widgets\n")
        assert "npm install widget" in readme
        assert "import widget from 'widget';" in readme
        assert "```js" in readme
        assert "go get" not in readme
        assert "Released under the MIT License." in readme
        assert "[LICENSE](./LICENSE)" in readme

    def test_go_readme(self):
        readme = render_readme(Language.GO, _context(name="github.com/acme/widget"))

        assert readme.startswith("# github.com/acme/widget\n")
        assert "go get github.com/acme/widget" in readme
        assert "```go" in readme
        assert "npm install" not in readme
        assert "import" not in readme

    def test_badges_default_empty(self):
        assert _context().badges == []

    def test_badges_are_joined_by_line(self):
        readme = render_readme(Language.NODE, _context(badges=["![a](a.svg)", "![b](b.svg)"]))
        assert "![a](a.svg)\n![b](b.svg)" in readme

    def test_blank_license_name(self):
        readme = render_readme(Language.NODE, _context(license_name=""))
        assert "Released under the . See file" in readme

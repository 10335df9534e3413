"""
Fixed-content tooling configuration files written into Node projects.

Each file delegates to a preset shipped by the ``pkg-cmd`` npm package so
that projects pick up shared lint/format/test/release settings.
"""

ESLINT_CONFIG = """\
module.exports = {
  extends: [require.resolve("pkg-cmd/eslint-config")],
};
"""

PRETTIER_CONFIG = """\
module.exports = { ...require("pkg-cmd/prettier-config") };
"""

JEST_CONFIG = """\
module.exports = {
  ...require("pkg-cmd/jest-config"),
};
"""

NP_CONFIG = """\
module.exports = {
  ...require("pkg-cmd/np-config"),
};
"""

# (step title, file name, content), in write order
TOOLING_FILES: list[tuple[str, str, str]] = [
    ("Configure eslint", ".eslintrc.js", ESLINT_CONFIG),
    ("Configure prettier", ".prettierrc.js", PRETTIER_CONFIG),
    ("Configure jest", "jest.config.js", JEST_CONFIG),
    ("Configure np", ".np-config.js", NP_CONFIG),
]

LINT_STAGED_FILE = ".lintstagedrc.js"

SOURCE_GLOB = "*.{js,jsx,ts,tsx}"
FORMAT_ONLY_GLOB = "*.{css,less,scss,md,html,htm,json,yml,yaml,mdx}"


def render_lint_staged_config(command_name: str) -> str:
    """Lint-staged config: format+lint source files, format everything else."""
    return (
        "module.exports = {\n"
        f'  "{SOURCE_GLOB}": ["{command_name} format", "{command_name} lint"],\n'
        f'  "{FORMAT_ONLY_GLOB}": ["{command_name} format"],\n'
        "};\n"
    )

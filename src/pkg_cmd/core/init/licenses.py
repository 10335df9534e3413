"""
License identifiers, canonical texts, and placeholder substitution.

The recognized identifiers and their display names ship with the package
(``pkg_cmd/data/licenses.json``). Canonical texts are downloaded from the
SPDX license-list-data repository at write time and have their
``<placeholder>`` tokens replaced with the project's details.
"""

from __future__ import annotations

import json
import re
from datetime import date
from functools import lru_cache
from importlib.resources import files

from pkg_cmd.core.config.models import SourcesConfig
from pkg_cmd.core.init.effects import Effects

# Applied in order; every spelling in a group maps to the same value.
YEAR_PATTERN = re.compile(r"<yyyy, yyyy>|<year>|<yyyy>", re.IGNORECASE)
HOLDER_PATTERN = re.compile(
    r"<author>|<name of author>|<owner organization name>|<name of development group>"
    r"|<name of institution>|<organization>|<owner>|<copyright holders>|<holders>"
    r"|<copyright holder>|<author's name or designee>",
    re.IGNORECASE,
)
LICENSE_NAME_PATTERN = re.compile(r"<insert your license name here>", re.IGNORECASE)
PROGRAM_PATTERN = re.compile(r"<program>|<product>", re.IGNORECASE)


@lru_cache(maxsize=1)
def load_license_names() -> dict[str, str]:
    """SPDX identifier -> display name for every recognized license."""
    data = files("pkg_cmd").joinpath("data", "licenses.json").read_text(encoding="utf-8")
    names: dict[str, str] = json.loads(data)
    return names


def license_ids() -> list[str]:
    """Recognized SPDX identifiers, in the order they are offered."""
    return list(load_license_names())


def license_display_name(license_id: str | None) -> str:
    """Display name for ``license_id``, or "" if unknown."""
    if not license_id:
        return ""
    return load_license_names().get(license_id, "")


def license_text_url(sources: SourcesConfig, license_id: str) -> str:
    return sources.license_text.format(license_id=license_id)


def fetch_license_text(effects: Effects, sources: SourcesConfig, license_id: str) -> str:
    """
    Download the canonical text for ``license_id``.

    Raises:
        FetchError: The text could not be downloaded
    """
    return effects.fetch_text(license_text_url(sources, license_id))


def fill_license_placeholders(
    text: str,
    *,
    author: str,
    license_id: str,
    name: str,
    year: int | None = None,
) -> str:
    """
    Replace the ``<placeholder>`` tokens in a canonical license text.

    Year tokens become the year (current year by default), holder tokens
    the author, the license-name token the identifier, and program/product
    tokens the project name. Matching is case-insensitive.

    Example:
        >>> fill_license_placeholders(
        ...     "Copyright (c) <year> <copyright holders>",
        ...     author="Jane Doe", license_id="MIT", name="demo", year=2024,
        ... )
        'Copyright (c) 2024 Jane Doe'
    """
    if year is None:
        year = date.today().year

    # Callables keep backslashes in the replacement values literal
    text = YEAR_PATTERN.sub(lambda _: str(year), text)
    text = HOLDER_PATTERN.sub(lambda _: author, text)
    text = LICENSE_NAME_PATTERN.sub(lambda _: license_id, text)
    text = PROGRAM_PATTERN.sub(lambda _: name, text)
    return text


def license_matches(text: str, license_id: str) -> bool:
    """
    True if ``license_id`` appears in ``text`` as a whitespace-delimited token.

    This is a heuristic: an incidental mention of the identifier in the
    license prose also counts as a match.
    """
    pattern = re.compile(rf"(\s|^){re.escape(license_id)}(\s|$)", re.IGNORECASE)
    return pattern.search(text) is not None

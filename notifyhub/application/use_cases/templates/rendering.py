"""Flat ``{{variable}}`` substitution used by templates and workers."""

from __future__ import annotations

import re
from collections.abc import Mapping

_TOKEN_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def render_template(template: str, variables: Mapping[str, object]) -> str:
    """Replace every ``{{name}}`` token of ``template`` with its value.

    Tokens without a matching key stay verbatim. Substituted values are not
    scanned again, so a value containing ``{{other}}`` is inserted as is.
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in variables:
            return str(variables[name])
        return match.group(0)

    return _TOKEN_PATTERN.sub(_substitute, template)


def extract_variables(template: str) -> list[str]:
    """Return the distinct token names of ``template`` in first-seen order."""

    names: list[str] = []
    for match in _TOKEN_PATTERN.finditer(template):
        name = match.group(1)
        if name not in names:
            names.append(name)
    return names


def merge_variables(declared: list[str] | None, *sources: str | None) -> list[str]:
    """Union of ``declared`` names and the tokens found in ``sources``."""

    merged: list[str] = []
    for name in declared or []:
        if name and name not in merged:
            merged.append(name)
    for source in sources:
        if not source:
            continue
        for name in extract_variables(source):
            if name not in merged:
                merged.append(name)
    return merged


__all__ = ["extract_variables", "merge_variables", "render_template"]

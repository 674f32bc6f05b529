"""Mapping – MappingRule and the declarative path-template syntax.

Template tokens:

* ``{name}`` – one path segment, captured under *name*;
* ``*``      – any characters within a single segment;
* ``**``     – any run of characters, ``/`` included (may be empty).

Everything else matches literally; templates must match the whole path.
"""
from __future__ import annotations

import dataclasses
import re
from typing import Callable, Mapping, Union

_TOKEN = re.compile(r"\*\*|\*|\{([A-Za-z_][A-Za-z0-9_]*)\}")

ResourceExtractor = Callable[[str, Mapping[str, str]], str]


def compile_path_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a path template into an anchored regular expression."""
    if not pattern:
        raise ValueError("path pattern must not be empty")
    parts: list[str] = []
    pos = 0
    for match in _TOKEN.finditer(pattern):
        parts.append(re.escape(pattern[pos:match.start()]))
        token = match.group(0)
        if token == "**":
            parts.append(".*")
        elif token == "*":
            parts.append("[^/]*")
        else:
            parts.append(f"(?P<{match.group(1)}>[^/]+)")
        pos = match.end()
    parts.append(re.escape(pattern[pos:]))
    return re.compile("".join(parts))


@dataclasses.dataclass(frozen=True)
class MappingRule:
    """Path template → resource identifier, with an optional action table.

    ``resource`` is either a :meth:`str.format` template over the template's
    captures (``"document:{doc_id}"``) or a callable ``(path, captures) -> str``.
    ``actions`` maps upper-case HTTP methods to actions for paths matched by
    this rule; methods missing from it use the default table.
    """
    pattern: str
    resource: Union[str, ResourceExtractor]
    actions: Mapping[str, str] | None = None
    _regex: re.Pattern[str] = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_regex", compile_path_pattern(self.pattern))
        if self.actions is not None:
            object.__setattr__(self, "actions", {k.upper(): v for k, v in self.actions.items()})

    def match(self, path: str) -> dict[str, str] | None:
        """Return the captures when *path* matches, else ``None``."""
        m = self._regex.fullmatch(path)
        return m.groupdict() if m is not None else None

    def resource_for(self, path: str, captures: Mapping[str, str]) -> str:
        if callable(self.resource):
            return self.resource(path, captures)
        return self.resource.format(**captures)

    def action_for(self, method: str) -> str | None:
        if self.actions is None:
            return None
        return self.actions.get(method.upper())


# Order matters: the first matching rule wins.
DEFAULT_RULES: tuple[MappingRule, ...] = (
    MappingRule("**/users/{user_id}/documents/{doc_id}", "document:{doc_id}"),
    MappingRule("**/users/{user_id}/documents/{doc_id}/**", "document:{doc_id}"),
    MappingRule("**/users/**", "user-api"),
    MappingRule("**/users", "user-api"),
)

__all__ = ["DEFAULT_RULES", "MappingRule", "ResourceExtractor", "compile_path_pattern"]

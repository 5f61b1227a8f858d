"""Path templating and tag inference.

Endpoint paths use ``:name`` placeholders, possibly inside a trailing query
string or fragment (``/users?filter=:filter#top``). OpenAPI paths use
``{name}`` and carry neither query string nor fragment.
"""

import re

PATH_PARAM_PATTERN = re.compile(r":([a-zA-Z_][a-zA-Z0-9_]*)")
QUERY_OR_FRAGMENT = re.compile(r"[?#]")


def path_without_query(path: str) -> str:
    """Return the part of a path before any query string or fragment."""
    return QUERY_OR_FRAGMENT.split(path, maxsplit=1)[0]


def path_param_names(path: str) -> list[str]:
    """Return every placeholder name in order of appearance, duplicates included."""
    return PATH_PARAM_PATTERN.findall(path)


def template_path(path: str) -> str:
    """Convert ``/users/:id?x=:y`` into the OpenAPI path ``/users/{id}``."""
    return path_without_query(PATH_PARAM_PATTERN.sub(r"{\1}", path))


def tags_from_path(path: str) -> list[str] | None:
    """Default tag: the last static segment of the path, if any."""
    resources = [
        part
        for part in PATH_PARAM_PATTERN.sub("", path_without_query(path)).split("/")
        if part != ""
    ]
    if not resources:
        return None
    return [resources[-1]]

"""Path helpers shared by the resolver, cache key generator and cache store."""

import os
from collections.abc import Iterable, Sequence


def join_path(segments: Iterable[str | os.PathLike[str]]) -> str:
    """Join path segments with the platform separator.

    Empty segments are skipped, so an empty cache directory resolves to the
    asset directory itself. Later segments are always nested under the
    first one, even when they start with a separator.

    Example:
        >>> join_path(["assets", "", "/cache"])
        'assets/cache'

    Args:
        segments: Path segments in order

    Returns:
        The joined path as a string (empty if every segment is empty)
    """
    parts = [os.fspath(segment) for segment in segments]
    parts = [part for part in parts if part]
    if not parts:
        return ""

    separators = os.sep + (os.altsep or "")
    head, *rest = parts
    return os.path.join(head, *(part.lstrip(separators) for part in rest))


def strip_extension(name: str) -> str:
    """Remove the final extension from a file name.

    Dot-files such as ``.env`` and names without an extension are
    returned unchanged.
    """
    root, _ = os.path.splitext(name)
    return root


def strip_extensions(names: Sequence[str], keep_last: bool = False) -> list[str]:
    """Remove the final extension from every name in a list.

    Example:
        >>> strip_extensions(["jquery.js", "plugin.js"], keep_last=True)
        ['jquery', 'plugin.js']

    Args:
        names: File names in request order
        keep_last: Keep the extension of the last entry

    Returns:
        New list with extensions removed
    """
    stripped = [strip_extension(name) for name in names]
    if keep_last and names:
        stripped[-1] = names[-1]
    return stripped

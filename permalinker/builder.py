"""
Permalink path builder.

Walks a record's ancestor chain through a resolver, turns every title into
a URL segment and joins them root first. The builder keeps no state between
calls and never modifies the records it reads.
"""

import inspect
import logging
import unicodedata
from itertools import groupby
from typing import Any, Callable, List, Optional

from slugify import slugify as _slugify

from .errors import CycleDetected, PathBuildCancelled
from .models import PathOptions, read_field, record_id
from .resolvers import as_resolver


def _folds_to_ascii(char: str) -> bool:
    return bool(unicodedata.normalize("NFKD", char).encode("ascii", "ignore"))


def normalize_segment(title: Any) -> str:
    """
    Convert a title into a URL-safe path segment.

    Latin text (accents included) and other scripts are transliterated
    separately, so a change of script always leaves a '-' between words.

    Args:
        title: The raw title; None yields an empty segment

    Returns:
        Lowercase ASCII segment with runs of other characters collapsed to '-'

    Examples:
        >>> normalize_segment("About Us!")
        'about-us'
        >>> normalize_segment("  Café  à Paris ")
        'cafe-a-paris'
        >>> normalize_segment("Привет мир")
        'privet-mir'
        >>> normalize_segment(None)
        ''
    """
    if title is None:
        return ""

    slugs = (
        _slugify("".join(run), lowercase=True, separator="-").strip("-")
        for _, run in groupby(str(title), key=_folds_to_ascii)
    )
    return "-".join(slug for slug in slugs if slug)


class _AncestorWalk:
    """
    Per-call state of one ancestor walk: segments, visited ids, chain.

    Shared by the sync and async builders so both apply the same cycle,
    segment and cancellation rules.
    """

    def __init__(self, options: PathOptions, is_cancelled: Optional[Callable[[], bool]]):
        self.options = options
        self.is_cancelled = is_cancelled
        self.segments: List[str] = []
        self.chain: List[Any] = []
        self.visited = set()

    def visit(self, current: Any) -> None:
        """Record one level of the chain; raises before a parent fetch if needed."""
        current_id = record_id(current)
        # Unsaved records have no id yet; they can only be the leaf.
        key = ("unsaved", id(current)) if current_id is None else current_id
        if key in self.visited:
            logging.warning(f"Cycle detected while building permalink for {self.chain[0]!r} at {current_id!r}")
            raise CycleDetected(current_id, self.chain)
        self.visited.add(key)
        self.chain.append(current_id)

        self.segments.insert(0, normalize_segment(read_field(current, self.options.title_field)))

        if self.is_cancelled is not None and self.is_cancelled():
            raise PathBuildCancelled(f"Permalink build cancelled before resolving parent of {current_id!r}")

    def path(self) -> str:
        segments = [segment for segment in self.segments if segment]
        if not segments:
            return self.options.placeholder
        return self.options.url_prefix + "/".join(segments)


def build_path(
    record: Any,
    resolve_parent: Any,
    options: Any = None,
    *,
    is_cancelled: Optional[Callable[[], bool]] = None
) -> str:
    """
    Build the permalink for a record.

    Args:
        record: The target record (Record, mapping or attribute object)
        resolve_parent: A ParentResolver or a callable returning a record's parent
        options: PathOptions, a mapping of option values, or None for defaults
        is_cancelled: Optional callable checked before every ancestor fetch

    Returns:
        The prefixed, slash-joined path, or the placeholder when every
        segment is empty

    Raises:
        CycleDetected: If the ancestor chain revisits a record
        PathBuildCancelled: If ``is_cancelled`` returns True
    """
    if record is None:
        raise ValueError("Cannot build a permalink for a missing record")

    walk = _AncestorWalk(PathOptions.coerce(options), is_cancelled)
    resolve = as_resolver(resolve_parent)

    current = record
    while current is not None:
        walk.visit(current)
        current = resolve(current)

    return walk.path()


async def build_path_async(
    record: Any,
    resolve_parent: Any,
    options: Any = None,
    *,
    is_cancelled: Optional[Callable[[], bool]] = None
) -> str:
    """
    Build the permalink for a record with a resolver that may suspend.

    Same algorithm as ``build_path``. Each ancestor is awaited in turn since
    a grandparent cannot be looked up before its child is known. Plain
    synchronous resolvers are accepted too.
    """
    if record is None:
        raise ValueError("Cannot build a permalink for a missing record")

    walk = _AncestorWalk(PathOptions.coerce(options), is_cancelled)
    resolve = as_resolver(resolve_parent)

    current = record
    while current is not None:
        walk.visit(current)
        parent = resolve(current)
        if inspect.isawaitable(parent):
            parent = await parent
        current = parent

    return walk.path()


class PathBuilder:
    """
    Builds permalinks with a fixed set of options.

    Holds only configuration, so one instance can serve any number of
    concurrent builds.
    """

    def __init__(self, options: Any = None):
        """
        Initialize the builder.

        Args:
            options: PathOptions, a mapping of option values, or None for defaults
        """
        self.options = PathOptions.coerce(options)

    def segment(self, record: Any) -> str:
        """Return the segment a single record contributes to its path."""
        return normalize_segment(read_field(record, self.options.title_field))

    def build(self, record: Any, resolve_parent: Any, is_cancelled: Optional[Callable[[], bool]] = None) -> str:
        """Build the permalink for a record."""
        return build_path(record, resolve_parent, self.options, is_cancelled=is_cancelled)

    async def build_async(
        self,
        record: Any,
        resolve_parent: Any,
        is_cancelled: Optional[Callable[[], bool]] = None
    ) -> str:
        """Build the permalink for a record with an awaitable resolver."""
        return await build_path_async(record, resolve_parent, self.options, is_cancelled=is_cancelled)

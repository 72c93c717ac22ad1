"""
Parent resolver interfaces for Permalinker.

A resolver is the one capability the builder needs from the host: given a
record, return its parent record, or None when the record is a root.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional


class ParentResolver(ABC):
    """
    Abstract base class for synchronous parent resolvers.

    Implementations are backed by the host data store (in memory, DuckDB,
    an HTTP API...). Storage errors should be raised as ResolutionFailure.
    """

    @abstractmethod
    def resolve_parent(self, record: Any) -> Optional[Any]:
        """
        Fetch the parent of a record.

        Args:
            record: The record whose parent is wanted

        Returns:
            The parent record, or None if the record is a root
        """
        pass


class AsyncParentResolver(ABC):
    """
    Abstract base class for resolvers whose lookups suspend (network, disk).
    """

    @abstractmethod
    async def resolve_parent(self, record: Any) -> Optional[Any]:
        """
        Fetch the parent of a record.

        Args:
            record: The record whose parent is wanted

        Returns:
            The parent record, or None if the record is a root
        """
        pass


class AsyncResolverAdapter(AsyncParentResolver):
    """
    Run a blocking resolver in a worker thread.

    Lets a synchronous store back ``build_path_async`` without blocking the
    event loop.
    """

    def __init__(self, resolver: Any):
        self._resolve = as_resolver(resolver)

    async def resolve_parent(self, record: Any) -> Optional[Any]:
        return await asyncio.to_thread(self._resolve, record)


def as_resolver(resolver: Any):
    """
    Turn a resolver object or a plain callable into a callable.

    Args:
        resolver: A ParentResolver, an AsyncParentResolver or a callable

    Returns:
        A callable taking a record and returning its parent (or an awaitable)
    """
    if isinstance(resolver, (ParentResolver, AsyncParentResolver)):
        return resolver.resolve_parent
    method = getattr(resolver, "resolve_parent", None)
    if callable(method):
        return method
    if callable(resolver):
        return resolver
    raise TypeError(f"Object of type {type(resolver).__name__} cannot resolve parents")

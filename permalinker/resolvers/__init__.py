"""Parent resolvers for walking record hierarchies."""

from .base import ParentResolver, AsyncParentResolver, AsyncResolverAdapter, as_resolver
from .memory import MappingResolver

__all__ = ["ParentResolver", "AsyncParentResolver", "AsyncResolverAdapter", "as_resolver", "MappingResolver"]

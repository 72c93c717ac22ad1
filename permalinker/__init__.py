"""
Permalinker: hierarchical permalink generation for content records.

Builds URL paths from a record's title and the titles of its ancestors.
"""

__version__ = "0.1.0"
__author__ = "Permalinker Project"

# Import main components
from .builder import PathBuilder, build_path, build_path_async, normalize_segment
from .errors import PermalinkError, CycleDetected, ResolutionFailure, PathBuildCancelled
from .models import Record, PathOptions
from .resolvers import ParentResolver, AsyncParentResolver, AsyncResolverAdapter, MappingResolver
from .interface import InterfaceDefinition, OptionField, interface_registry, generate_permalink
from .store import RecordStore

__all__ = [
    "PathBuilder",
    "build_path",
    "build_path_async",
    "normalize_segment",
    "PermalinkError",
    "CycleDetected",
    "ResolutionFailure",
    "PathBuildCancelled",
    "Record",
    "PathOptions",
    "ParentResolver",
    "AsyncParentResolver",
    "AsyncResolverAdapter",
    "MappingResolver",
    "InterfaceDefinition",
    "OptionField",
    "interface_registry",
    "generate_permalink",
    "RecordStore",
]

"""Expose document models."""

from .archvalue import ArchitectureList, ArchValue
from .srcinfo import Package, PackageBase, Srcinfo

__all__ = [
    "ArchValue",
    "ArchitectureList",
    "Package",
    "PackageBase",
    "Srcinfo",
]

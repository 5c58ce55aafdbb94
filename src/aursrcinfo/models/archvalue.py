"""Containers for values that may be scoped to a single architecture."""

from collections.abc import Iterator
from functools import total_ordering

from pydantic import BaseModel, Field, RootModel


@total_ordering
class ArchValue(BaseModel):
    """An architecture tag and the ordered values declared for it.

    An architecture of ``None`` means the values apply to every architecture.
    """

    architecture: str | None = None
    values: list[str] = Field(default_factory=list)

    def __lt__(self, other: "ArchValue") -> bool:
        if not isinstance(other, ArchValue):
            return NotImplemented
        return (self.architecture or "", self.values) < (other.architecture or "", other.values)

    def applies_to(self, arch: str) -> bool:
        """Return True if these values are active when building for ``arch``."""
        return self.architecture is None or self.architecture == arch

    supports = applies_to


class ArchitectureList(RootModel[list[ArchValue]]):
    """Ordered list of ArchValue buckets, at most one per architecture.

    Buckets keep the order in which their architecture was first seen.
    """

    root: list[ArchValue] = Field(default_factory=list)

    def __iter__(self) -> Iterator[ArchValue]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> ArchValue:
        return self.root[index]

    def get(self, arch: str | None) -> ArchValue | None:
        """Return the bucket declared for exactly ``arch``, if any."""
        for bucket in self.root:
            if bucket.architecture == arch:
                return bucket
        return None

    def get_any(self) -> ArchValue | None:
        """Return the architecture independent bucket, if any."""
        return self.get(None)

    def architectures(self) -> list[str | None]:
        return [bucket.architecture for bucket in self.root]

    def append(self, arch: str | None, value: str) -> None:
        """Add ``value`` to the bucket for ``arch``, creating it at the end if needed."""
        bucket = self.get(arch)
        if bucket is None:
            self.root.append(ArchValue(architecture=arch, values=[value]))
        else:
            bucket.values.append(value)

    def arch(self, arch: str) -> Iterator[str]:
        """Yield every value that applies to ``arch``, in list order.

        Args:
            arch: The target architecture (e.g. ``x86_64``)

        Returns:
            A generator over the values of each bucket that applies to ``arch``

        Examples:
            >>> values = ArchitectureList([ArchValue(values=["a"]), ArchValue(architecture="i686", values=["b"])])
            >>> list(values.arch("x86_64"))
            ['a']
        """
        for bucket in self.root:
            if bucket.applies_to(arch):
                yield from bucket.values

    filter_active = arch

    def all(self) -> Iterator[str]:
        """Yield the values of every bucket regardless of architecture."""
        for bucket in self.root:
            yield from bucket.values

    def any(self) -> Iterator[str]:
        """Yield only the values that are not architecture specific."""
        bucket = self.get_any()
        if bucket is not None:
            yield from bucket.values

"""Structured representation of a parsed .SRCINFO file."""

from collections.abc import Iterator
from typing import Annotated

from pydantic import BaseModel, Field

from aursrcinfo.models.archvalue import ArchitectureList

OptionalStr = str | None
StrListField = Annotated[list[str], Field(default_factory=list)]
ArchListField = Annotated[ArchitectureList, Field(default_factory=ArchitectureList)]


class PackageBase(BaseModel):
    """Fields that belong to the pkgbase and are shared by every package."""

    pkgbase: str = ""
    pkgver: str = ""
    pkgrel: str = ""
    epoch: OptionalStr = None
    source: ArchListField
    valid_pgp_keys: StrListField
    no_extract: StrListField
    md5sums: ArchListField
    sha1sums: ArchListField
    sha224sums: ArchListField
    sha256sums: ArchListField
    sha384sums: ArchListField
    sha512sums: ArchListField
    b2sums: ArchListField
    makedepends: ArchListField
    checkdepends: ArchListField


class Package(BaseModel):
    """A package section, or the template that package sections inherit from.

    The template is the set of package fields declared before the first
    pkgname line; its pkgname is empty.
    """

    pkgname: str = ""
    pkgdesc: OptionalStr = None
    arch: StrListField
    url: OptionalStr = None
    license: StrListField
    groups: StrListField
    depends: ArchListField
    optdepends: ArchListField
    provides: ArchListField
    conflicts: ArchListField
    replaces: ArchListField
    backup: StrListField
    options: StrListField
    install: OptionalStr = None
    changelog: OptionalStr = None

    def active(self, field: str, arch: str) -> list[str]:
        """Return the values of an architecture specific field that apply to ``arch``.

        Args:
            field: Name of an ArchitectureList field (e.g. ``depends``)
            arch: The target architecture

        Returns:
            The values of every bucket that applies to ``arch``, in order
        """
        values = getattr(self, field)
        if not isinstance(values, ArchitectureList):
            raise ValueError(f"field '{field}' is not architecture specific")
        return list(values.arch(arch))

    def supports_arch(self, arch: str) -> bool:
        """Whether the package builds for ``arch`` (or is architecture independent)."""
        return arch in self.arch or "any" in self.arch


class Srcinfo(BaseModel):
    """A whole .SRCINFO document.

    ``template`` holds the package fields declared in the pkgbase section,
    ``packages`` the concrete packages with the template already merged in.
    """

    comment: str = ""
    base: PackageBase = Field(default_factory=PackageBase)
    template: Package = Field(default_factory=Package)
    packages: list[Package] = Field(default_factory=list)

    def __str__(self) -> str:
        from aursrcinfo.formatter import to_text

        return to_text(self)

    @property
    def pkgbase(self) -> str:
        return self.base.pkgbase

    @property
    def pkgver(self) -> str:
        return self.base.pkgver

    @property
    def pkgrel(self) -> str:
        return self.base.pkgrel

    @property
    def epoch(self) -> str | None:
        return self.base.epoch

    def version(self) -> str:
        """Full version string: ``epoch:pkgver-pkgrel``, without ``epoch:`` when unset."""
        if self.base.epoch is not None:
            return f"{self.base.epoch}:{self.base.pkgver}-{self.base.pkgrel}"
        return f"{self.base.pkgver}-{self.base.pkgrel}"

    def pkgnames(self) -> Iterator[str]:
        for package in self.packages:
            yield package.pkgname

    def package(self, name: str) -> Package | None:
        """Return the package called ``name``, or None if there is none."""
        for package in self.packages:
            if package.pkgname == name:
                return package
        return None

    def active(self, field: str, arch: str) -> list[str]:
        """Return the values of a pkgbase or template field that apply to ``arch``."""
        if field in PackageBase.model_fields:
            values = getattr(self.base, field)
            if not isinstance(values, ArchitectureList):
                raise ValueError(f"field '{field}' is not architecture specific")
            return list(values.arch(arch))
        return self.template.active(field, arch)

"""Declarative table of the keys understood in a .SRCINFO file.

Both the parser and the formatter dispatch on this table, so a key only
has to be described once.
"""

from enum import Enum

from pydantic.dataclasses import dataclass


class Scope(str, Enum):
    """Where a key is allowed to appear.

    BASE: Only in the pkgbase section, before the first pkgname.
    PACKAGE: In the pkgbase section (as the template) or inside a package.
    """

    BASE = "base"
    PACKAGE = "package"


class Arity(str, Enum):
    """Shape of the value stored for a key.

    SCALAR: A single optional string, later lines overwrite earlier ones.
    LIST: A list of strings, each line appends one entry.
    ARCH_LIST: An ArchitectureList, the key may carry an ``_arch`` suffix.
    """

    SCALAR = "scalar"
    LIST = "list"
    ARCH_LIST = "arch_list"


@dataclass(frozen=True)
class FieldSpec:
    key: str
    attr: str
    scope: Scope
    arity: Arity

    @property
    def arch_specific(self) -> bool:
        """Whether the key accepts an ``_arch`` suffix."""
        return self.arity == Arity.ARCH_LIST

    @property
    def inheritable(self) -> bool:
        """Whether packages inherit the field from the template."""
        return self.scope == Scope.PACKAGE


PKGBASE = "pkgbase"
PKGNAME = "pkgname"

# fmt: off
# Order here is the order fields are written in the pkgbase section.
_FIELDS = [
    FieldSpec("pkgdesc",      "pkgdesc",        Scope.PACKAGE, Arity.SCALAR),
    FieldSpec("pkgver",       "pkgver",         Scope.BASE,    Arity.SCALAR),
    FieldSpec("pkgrel",       "pkgrel",         Scope.BASE,    Arity.SCALAR),
    FieldSpec("epoch",        "epoch",          Scope.BASE,    Arity.SCALAR),
    FieldSpec("url",          "url",            Scope.PACKAGE, Arity.SCALAR),
    FieldSpec("install",      "install",        Scope.PACKAGE, Arity.SCALAR),
    FieldSpec("changelog",    "changelog",      Scope.PACKAGE, Arity.SCALAR),
    FieldSpec("arch",         "arch",           Scope.PACKAGE, Arity.LIST),
    FieldSpec("groups",       "groups",         Scope.PACKAGE, Arity.LIST),
    FieldSpec("license",      "license",        Scope.PACKAGE, Arity.LIST),
    FieldSpec("checkdepends", "checkdepends",   Scope.BASE,    Arity.ARCH_LIST),
    FieldSpec("makedepends",  "makedepends",    Scope.BASE,    Arity.ARCH_LIST),
    FieldSpec("depends",      "depends",        Scope.PACKAGE, Arity.ARCH_LIST),
    FieldSpec("optdepends",   "optdepends",     Scope.PACKAGE, Arity.ARCH_LIST),
    FieldSpec("provides",     "provides",       Scope.PACKAGE, Arity.ARCH_LIST),
    FieldSpec("conflicts",    "conflicts",      Scope.PACKAGE, Arity.ARCH_LIST),
    FieldSpec("replaces",     "replaces",       Scope.PACKAGE, Arity.ARCH_LIST),
    FieldSpec("noextract",    "no_extract",     Scope.BASE,    Arity.LIST),
    FieldSpec("options",      "options",        Scope.PACKAGE, Arity.LIST),
    FieldSpec("backup",       "backup",         Scope.PACKAGE, Arity.LIST),
    FieldSpec("source",       "source",         Scope.BASE,    Arity.ARCH_LIST),
    FieldSpec("validpgpkeys", "valid_pgp_keys", Scope.BASE,    Arity.LIST),
    FieldSpec("md5sums",      "md5sums",        Scope.BASE,    Arity.ARCH_LIST),
    FieldSpec("sha1sums",     "sha1sums",       Scope.BASE,    Arity.ARCH_LIST),
    FieldSpec("sha224sums",   "sha224sums",     Scope.BASE,    Arity.ARCH_LIST),
    FieldSpec("sha256sums",   "sha256sums",     Scope.BASE,    Arity.ARCH_LIST),
    FieldSpec("sha384sums",   "sha384sums",     Scope.BASE,    Arity.ARCH_LIST),
    FieldSpec("sha512sums",   "sha512sums",     Scope.BASE,    Arity.ARCH_LIST),
    FieldSpec("b2sums",       "b2sums",         Scope.BASE,    Arity.ARCH_LIST),
]
# fmt: on

FIELDS: dict[str, FieldSpec] = {spec.key: spec for spec in _FIELDS}

# Order packages are written in, which differs from the pkgbase section.
PACKAGE_FIELD_ORDER = [
    "pkgdesc", "url", "install", "changelog",
    "arch", "groups", "license",
    "depends", "optdepends", "provides", "conflicts", "replaces",
    "options", "backup",
]  # fmt: skip

PACKAGE_FIELDS: list[FieldSpec] = [FIELDS[key] for key in PACKAGE_FIELD_ORDER]
BASE_FIELDS: list[FieldSpec] = [spec for spec in _FIELDS if spec.scope == Scope.BASE]


def lookup(key: str) -> FieldSpec | None:
    """Return the FieldSpec for a key without its architecture suffix."""
    return FIELDS.get(key)

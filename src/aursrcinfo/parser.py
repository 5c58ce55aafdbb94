"""Line parser and merge engine for .SRCINFO files."""

import io
import logging
import os
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import BinaryIO, TextIO

from aursrcinfo.errors import ErrorKind, SrcinfoError
from aursrcinfo.models import ArchitectureList, Package, Srcinfo
from aursrcinfo.schema import PACKAGE_FIELDS, PKGBASE, PKGNAME, Arity, Scope, lookup

logger = logging.getLogger(__name__)

Override = tuple[str, str | None]


class ParserState(str, Enum):
    """Which section of the file the parser is in.

    AWAITING_BASE: No pkgbase line seen yet, only comments are accepted.
    IN_TEMPLATE: After pkgbase, before the first pkgname.
    IN_PACKAGE: Inside the section of the most recent pkgname.
    """

    AWAITING_BASE = "awaiting_base"
    IN_TEMPLATE = "in_template"
    IN_PACKAGE = "in_package"


def split_pair(line: str) -> tuple[str, str | None]:
    """Split a ``key = value`` line into its trimmed key and value.

    An empty value is returned as None.

    Examples:
        >>> split_pair(" a = b ")
        ('a', 'b')
        >>> split_pair("a==b")
        ('a', '=b')
        >>> split_pair("a =")
        ('a', None)
    """
    key, sep, value = line.partition("=")
    if not sep:
        raise SrcinfoError(ErrorKind.EMPTY_VALUE, key=line)
    key, value = key.strip(), value.strip()
    if not key:
        raise SrcinfoError(ErrorKind.EMPTY_KEY)
    return key, value or None


def split_key_arch(key: str) -> tuple[str, str | None]:
    """Split ``depends_x86_64`` into ``("depends", "x86_64")``.

    Only the first underscore separates, the architecture keeps the rest.
    """
    key, sep, arch = key.partition("_")
    return key, arch if sep else None


class Parser:
    """Consumes .SRCINFO lines one at a time and builds a Srcinfo.

    Packages are completed (merged with the template) when the next
    pkgname line or the end of input is reached, so no line is ever
    looked at twice.
    """

    def __init__(self):
        self.srcinfo = Srcinfo()
        self.state = ParserState.AWAITING_BASE
        # (key, arch) pairs the current package set to an empty value
        self.overrides: set[Override] = set()

    @classmethod
    def parse_lines(cls, lines: Iterable[str]) -> Srcinfo:
        """Parse an iterable of text lines into a Srcinfo.

        Raises:
            SrcinfoError: On the first invalid line, or when a required field is missing
        """
        parser = cls()
        for number, line in enumerate(lines, start=1):
            try:
                parser.parse_line(line)
            except SrcinfoError as e:
                e.at_line(number, line.strip())
                raise
        return parser.finish()

    @property
    def current(self) -> Package:
        """The package receiving package-scope fields: the latest package, else the template."""
        if self.state is ParserState.IN_PACKAGE:
            return self.srcinfo.packages[-1]
        return self.srcinfo.template

    def parse_line(self, line: str) -> None:
        line = line.strip()

        if self.state is ParserState.AWAITING_BASE and line.startswith("#"):
            self._add_comment(line[1:].strip())

        if not line or line.startswith("#"):
            return

        key, value = split_pair(line)
        self._set_header_or_field(key, value)

    def finish(self) -> Srcinfo:
        """Complete the last package and check that required fields are present."""
        self._merge_current_package()
        self._check_missing()
        logger.debug(
            f"Parsed pkgbase '{self.srcinfo.pkgbase}' {self.srcinfo.version()} "
            f"with {len(self.srcinfo.packages)} package(s)"
        )
        return self.srcinfo

    def _add_comment(self, text: str) -> None:
        if self.srcinfo.comment:
            self.srcinfo.comment += "\n"
        self.srcinfo.comment += text

    def _set_header_or_field(self, key: str, value: str | None) -> None:
        if key == PKGBASE:
            self._set_pkgbase(value)
        elif self.state is ParserState.AWAITING_BASE:
            raise SrcinfoError(ErrorKind.KEY_BEFORE_PKGBASE, key=key)
        elif key == PKGNAME:
            if value is None:
                raise SrcinfoError(ErrorKind.EMPTY_VALUE, key=key)
            self._push_package(value)
        else:
            self._set_field(key, value)

    def _set_pkgbase(self, value: str | None) -> None:
        if self.srcinfo.base.pkgbase:
            raise SrcinfoError(ErrorKind.DUPLICATE_PKGBASE)
        if value is None:
            raise SrcinfoError(ErrorKind.EMPTY_VALUE, key=PKGBASE)
        self.srcinfo.base.pkgbase = value
        self.state = ParserState.IN_TEMPLATE

    def _push_package(self, pkgname: str) -> None:
        self._merge_current_package()
        self.srcinfo.packages.append(Package(pkgname=pkgname))
        self.state = ParserState.IN_PACKAGE

    def _governing_arches(self) -> list[str]:
        """The arch list that architecture suffixes are checked against."""
        package = self.current
        if not package.arch and ("arch", None) not in self.overrides:
            return self.srcinfo.template.arch
        return package.arch

    def _set_field(self, key_arch: str, value: str | None) -> None:
        key, arch = split_key_arch(key_arch)

        if value is None:
            if self.state is not ParserState.IN_PACKAGE:
                raise SrcinfoError(ErrorKind.EMPTY_VALUE, key=key)
            self.overrides.add((key, arch))
            return

        # the first empty assignment wins for the rest of the package
        if (key, arch) in self.overrides:
            return

        if arch is not None and (arch == "any" or arch not in self._governing_arches()):
            raise SrcinfoError(ErrorKind.UNDECLARED_ARCH, key=key_arch, arch=arch)

        spec = lookup(key)
        if spec is None:
            logger.debug(f"Ignoring unknown key '{key_arch}'")
            return

        if arch is not None and not spec.arch_specific:
            raise SrcinfoError(ErrorKind.NOT_ARCH_SPECIFIC, key=key_arch)

        if spec.scope == Scope.BASE:
            if self.state is ParserState.IN_PACKAGE:
                raise SrcinfoError(ErrorKind.KEY_AFTER_PKGNAME, key=key_arch)
            target = self.srcinfo.base
        else:
            target = self.current

        match spec.arity:
            case Arity.SCALAR:
                setattr(target, spec.attr, value)
            case Arity.LIST:
                getattr(target, spec.attr).append(value)
            case Arity.ARCH_LIST:
                getattr(target, spec.attr).append(arch, value)

    def _merge_current_package(self) -> None:
        """Copy template fields into the current package unless it set or overrode them."""
        if self.state is not ParserState.IN_PACKAGE:
            return

        package = self.srcinfo.packages[-1]
        template = self.srcinfo.template

        for spec in PACKAGE_FIELDS:
            inherited = getattr(template, spec.attr)
            match spec.arity:
                case Arity.SCALAR:
                    if getattr(package, spec.attr) is None and (spec.key, None) not in self.overrides:
                        setattr(package, spec.attr, inherited)
                case Arity.LIST:
                    if not getattr(package, spec.attr) and (spec.key, None) not in self.overrides:
                        setattr(package, spec.attr, list(inherited))
                case Arity.ARCH_LIST:
                    values: ArchitectureList = getattr(package, spec.attr)
                    for bucket in inherited:
                        if (spec.key, bucket.architecture) in self.overrides:
                            continue
                        if values.get(bucket.architecture) is None:
                            values.root.append(bucket.model_copy(deep=True))

        if self.overrides:
            logger.debug(f"Package '{package.pkgname}' overrides {sorted(self.overrides, key=str)}")
        self.overrides.clear()

    def _check_missing(self) -> None:
        if not self.srcinfo.base.pkgbase:
            field = PKGBASE
        elif not self.srcinfo.packages:
            field = PKGNAME
        elif not self.srcinfo.base.pkgver:
            field = "pkgver"
        elif not self.srcinfo.base.pkgrel:
            field = "pkgrel"
        else:
            return
        raise SrcinfoError(ErrorKind.MISSING_FIELD, key=field)


def _decode_lines(lines: Iterable[bytes | str]) -> Iterator[str]:
    try:
        for line in lines:
            if isinstance(line, bytes):
                line = line.decode("utf-8")
            yield line
    except (OSError, UnicodeDecodeError) as e:
        raise SrcinfoError(ErrorKind.IO_ERROR, detail=str(e)) from e


def parse(stream: BinaryIO | TextIO | Iterable[bytes | str]) -> Srcinfo:
    """Parse a .SRCINFO document from a binary or text stream.

    Args:
        stream: Anything that yields lines, e.g. a file opened in ``rb`` mode

    Returns:
        The parsed document

    Raises:
        SrcinfoError: If the document is invalid or the stream can not be read
    """
    return Parser.parse_lines(_decode_lines(stream))


def parse_str(text: str) -> Srcinfo:
    """Parse a .SRCINFO document held in a string."""
    return parse(io.StringIO(text))


def parse_file(path: str | os.PathLike[str]) -> Srcinfo:
    """Open and parse a .SRCINFO file.

    Raises:
        SrcinfoError: With kind IO_ERROR if the file can not be opened or read
    """
    try:
        fh = open(path, "rb")
    except OSError as e:
        raise SrcinfoError(ErrorKind.IO_ERROR, detail=str(e)) from e
    with fh:
        return parse(fh)

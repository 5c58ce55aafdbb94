"""Errors raised while reading a .SRCINFO file."""

from enum import Enum

from pydantic import BaseModel


class ErrorKind(str, Enum):
    DUPLICATE_PKGBASE = "duplicate_pkgbase"
    UNDECLARED_ARCH = "undeclared_arch"
    KEY_AFTER_PKGNAME = "key_after_pkgname"
    KEY_BEFORE_PKGBASE = "key_before_pkgbase"
    MISSING_FIELD = "missing_field"
    EMPTY_KEY = "empty_key"
    EMPTY_VALUE = "empty_value"
    NOT_ARCH_SPECIFIC = "not_arch_specific"
    IO_ERROR = "io_error"


class ErrorLine(BaseModel):
    """The 1-based line number and trimmed text of the offending line."""

    number: int
    line: str


class SrcinfoError(Exception):
    """A .SRCINFO file could not be parsed.

    Attributes:
        kind: What went wrong
        key: The key (or missing field name) involved, when there is one
        arch: The offending architecture for UNDECLARED_ARCH
        line: Where it went wrong; None for errors not caused by a single line
    """

    def __init__(
        self,
        kind: ErrorKind,
        key: str | None = None,
        arch: str | None = None,
        line: ErrorLine | None = None,
        detail: str | None = None,
    ):
        self.kind = kind
        self.key = key
        self.arch = arch
        self.line = line
        self.detail = detail
        super().__init__(kind, key, arch)

    @property
    def message(self) -> str:
        match self.kind:
            case ErrorKind.DUPLICATE_PKGBASE:
                return "pkgbase already set"
            case ErrorKind.UNDECLARED_ARCH:
                return f"undeclared arch '{self.arch}' in key '{self.key}'"
            case ErrorKind.KEY_AFTER_PKGNAME:
                return f"key '{self.key}' used after pkgname"
            case ErrorKind.KEY_BEFORE_PKGBASE:
                return f"key '{self.key}' used before pkgbase"
            case ErrorKind.MISSING_FIELD:
                return f"field '{self.key}' is required"
            case ErrorKind.EMPTY_KEY:
                return "field has no key"
            case ErrorKind.EMPTY_VALUE:
                return f"key '{self.key}' requires a value"
            case ErrorKind.NOT_ARCH_SPECIFIC:
                return f"key '{self.key}' can not be architecture specific"
            case ErrorKind.IO_ERROR:
                return self.detail or "i/o error"

    def __str__(self) -> str:
        if self.line is not None:
            return f"{self.message}: Line {self.line.number}: {self.line.line}"
        return self.message

    def at_line(self, number: int, text: str) -> "SrcinfoError":
        """Attach the source line that caused this error and return it."""
        self.line = ErrorLine(number=number, line=text)
        return self

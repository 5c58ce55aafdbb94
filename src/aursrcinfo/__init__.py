"""aursrcinfo: parser and formatter for .SRCINFO package build metadata."""

from .errors import ErrorKind, ErrorLine, SrcinfoError
from .formatter import to_text
from .models import ArchitectureList, ArchValue, Package, PackageBase, Srcinfo
from .parser import Parser, ParserState, parse, parse_file, parse_str

__all__ = [
    "ArchValue",
    "ArchitectureList",
    "ErrorKind",
    "ErrorLine",
    "Package",
    "PackageBase",
    "Parser",
    "ParserState",
    "Srcinfo",
    "SrcinfoError",
    "parse",
    "parse_file",
    "parse_str",
    "to_text",
]

"""Write a Srcinfo back out as .SRCINFO text."""

from collections.abc import Iterable

from aursrcinfo.models import ArchitectureList, ArchValue, Package, Srcinfo
from aursrcinfo.schema import FIELDS, PACKAGE_FIELDS, PKGBASE, PKGNAME, Arity, FieldSpec, Scope


def _line(key: str, value: str, arch: str | None = None) -> str:
    if arch is not None:
        return f"\t{key}_{arch} = {value}"
    return f"\t{key} = {value}"


def _bucket_lines(key: str, bucket: ArchValue) -> list[str]:
    return [_line(key, value, bucket.architecture) for value in bucket.values]


def _field_lines(spec: FieldSpec, value: str | list[str] | ArchitectureList | None) -> list[str]:
    """All lines for a field, as written in the pkgbase section."""
    match spec.arity:
        case Arity.SCALAR:
            return [] if value is None else [_line(spec.key, value)]
        case Arity.LIST:
            return [_line(spec.key, item) for item in value]
        case Arity.ARCH_LIST:
            return [line for bucket in value for line in _bucket_lines(spec.key, bucket)]


def _inherited_tail(values: ArchitectureList, inherited: ArchitectureList) -> int:
    """Index of the first bucket that parsing would append back from the template.

    Buckets from this index on are exactly the template buckets, in template
    order, that the package did not declare itself, so they can be left out.
    """
    archs = values.architectures()
    for start in range(len(values) + 1):
        declared = set(archs[:start])
        tail = [bucket for bucket in inherited if bucket.architecture in archs and bucket.architecture not in declared]
        if values.root[start:] == tail:
            return start
    return len(values)


def _arch_list_delta(values: ArchitectureList, inherited: ArchitectureList) -> tuple[list[ArchValue], list[str | None]]:
    """Buckets a package has to write, and the template architectures it cleared.

    Template buckets the package does not have are written as empty
    assignments so they are not inherited again when parsed.
    """
    explicit = [bucket for bucket in values.root[: _inherited_tail(values, inherited)] if bucket.values]
    cleared = [
        bucket.architecture
        for bucket in inherited
        if bucket.values and values.get(bucket.architecture) is None
    ]
    return explicit, cleared


def _split_at_arch_line(
    buckets: list[ArchValue], template_arches: list[str], package_arches: list[str]
) -> tuple[list[ArchValue], list[ArchValue]]:
    """Split buckets into those written before and after the package's arch line.

    Until the package's own arch line is parsed, suffixes are checked against
    the template arch list, afterwards against the package's.
    """
    template_only = [
        i
        for i, bucket in enumerate(buckets)
        if bucket.architecture in template_arches and bucket.architecture not in package_arches
    ]
    if not template_only:
        return [], buckets

    cut = template_only[-1] + 1
    before, after = [], []
    for bucket in buckets[:cut]:
        if bucket.architecture is None or bucket.architecture in template_arches:
            before.append(bucket)
        else:
            after.append(bucket)
    return before, after + buckets[cut:]


def _package_lines(package: Package, template: Package) -> list[str]:
    lines = [f"{PKGNAME} = {package.pkgname}"]
    narrowed = package.arch != template.arch

    after_arch: dict[str, list[str]] = {}
    for spec in PACKAGE_FIELDS:
        if spec.arity != Arity.ARCH_LIST:
            continue
        explicit, cleared = _arch_list_delta(getattr(package, spec.attr), getattr(template, spec.attr))
        before, after = _split_at_arch_line(explicit, template.arch, package.arch) if narrowed else ([], explicit)
        lines.extend(line for bucket in before for line in _bucket_lines(spec.key, bucket))
        after_arch[spec.key] = [line for bucket in after for line in _bucket_lines(spec.key, bucket)]
        after_arch[spec.key].extend(_line(spec.key, "", arch) for arch in cleared)

    for spec in PACKAGE_FIELDS:
        value = getattr(package, spec.attr)
        inherited = getattr(template, spec.attr)
        match spec.arity:
            case Arity.SCALAR:
                if value != inherited:
                    lines.append(_line(spec.key, value or ""))
            case Arity.LIST:
                if value != inherited:
                    lines.extend(_field_lines(spec, value) or [_line(spec.key, "")])
            case Arity.ARCH_LIST:
                lines.extend(after_arch[spec.key])
    return lines


def _base_lines(srcinfo: Srcinfo) -> list[str]:
    lines = [f"{PKGBASE} = {srcinfo.base.pkgbase}"]
    for spec in FIELDS.values():
        source = srcinfo.base if spec.scope == Scope.BASE else srcinfo.template
        value = getattr(source, spec.attr)
        if spec.key in ("pkgver", "pkgrel"):
            lines.append(_line(spec.key, value))
        else:
            lines.extend(_field_lines(spec, value))
    return lines


def _comment_lines(comment: str) -> Iterable[str]:
    if not comment:
        return
    # split, not splitlines: a trailing empty entry is a bare "#" of its own
    for text in comment.split("\n"):
        yield f"# {text}"


def to_text(srcinfo: Srcinfo) -> str:
    """Render ``srcinfo`` as canonical .SRCINFO text.

    Packages only list the fields that differ from what they would inherit,
    so parsing the output gives back an equal document. Comments other than
    the header, blank lines and the original line order are not preserved.

    Args:
        srcinfo: The document to render

    Returns:
        The .SRCINFO text, ending with a newline
    """
    sections = ["\n".join([*_comment_lines(srcinfo.comment), *_base_lines(srcinfo)])]
    for package in srcinfo.packages:
        sections.append("\n".join(_package_lines(package, srcinfo.template)))
    return "\n\n".join(sections) + "\n"

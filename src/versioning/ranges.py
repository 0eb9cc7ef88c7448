"""Canonical npm-style range helpers built on semantic_version.

Every ecosystem adapter converts its native range syntax into this grammar
before calling into the classifier:

    ``||`` alternatives, hyphen ranges (``1.2.3 - 1.4.5``), space separated
    comparators using ``^ ~ >= <= > < =`` (or no operator) and partial or
    x-range versions (``1``, ``1.2``, ``1.x``, ``*``). An empty string
    matches any version.

Matching is delegated to ``semantic_version.NpmSpec``. The comparator
desugaring below is only needed for questions NpmSpec does not answer,
namely "is this version below the whole range" and "is this an exact pin".
"""

import re
from typing import Iterable, List, NamedTuple, Optional

import semantic_version

NUMBER = r"x|X|\*|0|[1-9][0-9]*"
PART = r"[a-zA-Z0-9.-]*"
BLOCK_REGEX = re.compile(
    r"""
    ^(?:v)?
    (?P<op><=|>=|<|>|=|\^|~|)
    (?P<major>{nb})(?:\.(?P<minor>{nb})(?:\.(?P<patch>{nb}))?)?
    (?:-(?P<prerel>{part}))?
    (?:\+(?P<build>{part}))?
    $""".format(nb=NUMBER, part=PART),
    re.VERBOSE,
)
OPERATOR_GAP_REGEX = re.compile(r"(?P<op><=|>=|<|>|=|\^|~)\s*v?(?=[0-9xX*])")
JOINER = "||"
HYPHEN = " - "


class Comparator(NamedTuple):
    """A single ``operator version`` pair; ``version`` is None for "any"."""
    operator: str
    version: Optional[semantic_version.Version]


ANY = Comparator("", None)
NULL_SET = Comparator("<", semantic_version.Version("0.0.0-0"))
ZERO = Comparator(">=", semantic_version.Version("0.0.0"))


def parse_version_strict(text: Optional[str]) -> Optional[semantic_version.Version]:
    """Safely parse a full semantic version string (a leading ``v`` is allowed)."""
    if not isinstance(text, str):
        return None
    s = text.strip()
    if s.startswith("v"):
        s = s[1:]
    try:
        return semantic_version.Version(s)
    except ValueError:
        return None


def normalize_range(range_text: str) -> str:
    """Rewrite loose npm spellings into the form NpmSpec parses.

    Runs of whitespace collapse to one space, the gap between an operator
    and its version is removed (``>= 1.0.0`` -> ``>=1.0.0``) and a ``v``
    after an operator is dropped (``^v1.2.3`` -> ``^1.2.3``).
    """
    s = " ".join(range_text.split())
    return OPERATOR_GAP_REGEX.sub(r"\g<op>", s)


def _parse_spec(range_text: Optional[str]) -> semantic_version.NpmSpec:
    if not isinstance(range_text, str):
        raise ValueError(f"Invalid range: {range_text!r}")
    try:
        return semantic_version.NpmSpec(normalize_range(range_text))
    except (AttributeError, IndexError, TypeError) as exc:
        # NpmSpec fails this way on hyphen ranges it cannot split into blocks
        raise ValueError(f"Invalid range: {range_text!r}") from exc


def valid_range(range_text: Optional[str]) -> bool:
    """Return True when the text parses as a canonical range (or version)."""
    try:
        _parse_spec(range_text)
    except ValueError:
        return False
    return True


def satisfies(version: Optional[str], range_text: Optional[str]) -> bool:
    """Check a version against a range; invalid input never matches."""
    ver = parse_version_strict(version)
    if ver is None:
        return False
    try:
        return bool(_parse_spec(range_text).match(ver))
    except ValueError:
        return False


def max_satisfying(versions: Iterable[str], range_text: Optional[str]) -> Optional[str]:
    """Return the highest version in ``versions`` matching the range.

    The winning entry is returned as the caller spelled it. Entries that
    are not full semantic versions are skipped.

    Raises:
        ValueError: if ``range_text`` is not a valid range.
    """
    spec = _parse_spec(range_text)
    best = None
    best_text = None
    for text in versions:
        ver = parse_version_strict(text)
        if ver is None or not spec.match(ver):
            continue
        if best is None or ver > best:
            best, best_text = ver, text
    return best_text


def lt(a: Optional[str], b: Optional[str]) -> bool:
    """Semantic ``a < b``; False when either side is not a version."""
    va, vb = parse_version_strict(a), parse_version_strict(b)
    if va is None or vb is None:
        return False
    return va < vb


def gt(a: Optional[str], b: Optional[str]) -> bool:
    """Semantic ``a > b``; False when either side is not a version."""
    va, vb = parse_version_strict(a), parse_version_strict(b)
    if va is None or vb is None:
        return False
    return va > vb


def _is_x(part: Optional[str]) -> bool:
    return part is None or part in ("x", "X", "*")


def _version(major: int, minor: int = 0, patch: int = 0, prerelease: str = "") -> semantic_version.Version:
    text = f"{major}.{minor}.{patch}"
    if prerelease:
        text = f"{text}-{prerelease}"
    return semantic_version.Version(text)


def _caret(major: int, minor: Optional[str], patch: Optional[str], prerel: str) -> List[Comparator]:
    if _is_x(minor):
        return [Comparator(">=", _version(major)), Comparator("<", _version(major + 1, prerelease="0"))]
    mi = int(minor)
    if _is_x(patch):
        upper = _version(major, mi + 1, prerelease="0") if major == 0 else _version(major + 1, prerelease="0")
        return [Comparator(">=", _version(major, mi)), Comparator("<", upper)]
    pa = int(patch)
    if major == 0 and mi == 0:
        upper = _version(0, 0, pa + 1, prerelease="0")
    elif major == 0:
        upper = _version(0, mi + 1, prerelease="0")
    else:
        upper = _version(major + 1, prerelease="0")
    return [Comparator(">=", _version(major, mi, pa, prerel)), Comparator("<", upper)]


def _tilde(major: int, minor: Optional[str], patch: Optional[str], prerel: str) -> List[Comparator]:
    if _is_x(minor):
        return [Comparator(">=", _version(major)), Comparator("<", _version(major + 1, prerelease="0"))]
    mi = int(minor)
    lower = _version(major, mi) if _is_x(patch) else _version(major, mi, int(patch), prerel)
    return [Comparator(">=", lower), Comparator("<", _version(major, mi + 1, prerelease="0"))]


def _primitive(op: str, major: int, minor: Optional[str], patch: Optional[str], prerel: str) -> List[Comparator]:
    """Expand a plain comparator, honouring x-range partials."""
    if op == "=":
        op = ""
    if not _is_x(minor) and not _is_x(patch):
        return [Comparator(op, _version(major, int(minor), int(patch), prerel))]

    mi = 0 if _is_x(minor) else int(minor)
    if not op:
        if _is_x(minor):
            return [Comparator(">=", _version(major)), Comparator("<", _version(major + 1, prerelease="0"))]
        return [Comparator(">=", _version(major, mi)), Comparator("<", _version(major, mi + 1, prerelease="0"))]

    if op == ">":
        op = ">="
        if _is_x(minor):
            major, mi = major + 1, 0
        else:
            mi += 1
    elif op == "<=":
        op = "<"
        if _is_x(minor):
            major += 1
        else:
            mi += 1
    return [Comparator(op, _version(major, mi, 0, "0" if op == "<" else ""))]


def _block_comparators(block: str) -> List[Comparator]:
    m = BLOCK_REGEX.match(block)
    if not m:
        raise ValueError(f"Invalid range block: {block!r}")
    op = m.group("op")
    if _is_x(m.group("major")):
        return [NULL_SET] if op in ("<", ">") else [ANY]
    major = int(m.group("major"))
    minor, patch = m.group("minor"), m.group("patch")
    prerel = m.group("prerel") or ""
    if op == "^":
        return _caret(major, minor, patch, prerel)
    if op == "~":
        return _tilde(major, minor, patch, prerel)
    return _primitive(op, major, minor, patch, prerel)


def _hyphen_comparators(left: str, right: str) -> List[Comparator]:
    lo = BLOCK_REGEX.match(left)
    hi = BLOCK_REGEX.match(right)
    if not lo or not hi or lo.group("op") or hi.group("op"):
        raise ValueError(f"Invalid hyphen range: {left!r} - {right!r}")

    comparators = []
    if not _is_x(lo.group("major")):
        comparators.extend(_primitive(">=", int(lo.group("major")), lo.group("minor") or "0",
                                      lo.group("patch") or "0", lo.group("prerel") or ""))
    if not _is_x(hi.group("major")):
        major, minor, patch = int(hi.group("major")), hi.group("minor"), hi.group("patch")
        if _is_x(minor):
            comparators.append(Comparator("<", _version(major + 1, prerelease="0")))
        elif _is_x(patch):
            comparators.append(Comparator("<", _version(major, int(minor) + 1, prerelease="0")))
        else:
            comparators.append(Comparator("<=", _version(major, int(minor), int(patch), hi.group("prerel") or "")))
    return comparators or [ANY]


def comparator_sets(range_text: Optional[str]) -> List[List[Comparator]]:
    """Desugar a range into its alternatives of comparators.

    ``^1.2.3`` becomes ``[[>=1.2.3, <2.0.0-0]]``, ``1.2.3`` becomes
    ``[[1.2.3]]`` and an empty range becomes ``[[ANY]]``.

    Raises:
        ValueError: on text outside the canonical grammar.
    """
    if not isinstance(range_text, str):
        raise ValueError(f"Invalid range: {range_text!r}")

    sets = []
    for group in normalize_range(range_text).split(JOINER):
        group = group.strip()
        if HYPHEN in group:
            left, right = group.split(HYPHEN, 1)
            comparators = _hyphen_comparators(left.strip(), right.strip())
        else:
            comparators = []
            for block in group.split() or [""]:
                comparators.extend(_block_comparators(block) if block else [ANY])

        if NULL_SET in comparators:
            comparators = [NULL_SET]
        elif len(comparators) > 1:
            comparators = [c for c in comparators if c is not ANY] or [ANY]
        sets.append(comparators)
    return sets


def ltr(version: Optional[str], range_text: Optional[str]) -> bool:
    """Return True when ``version`` is lower than every version the range allows.

    A version that satisfies the range is never "less than" it. Note that a
    prerelease outside its own patch is excluded by the range, so it can be
    reported as lower even when its numbers sit inside the bounds.
    """
    ver = parse_version_strict(version)
    if ver is None or satisfies(version, range_text):
        return False
    try:
        sets = comparator_sets(range_text)
    except ValueError:
        return False

    for comparators in sets:
        comparators = [ZERO if c.version is None else c for c in comparators]
        lowest = highest = comparators[0]
        for comparator in comparators[1:]:
            if comparator.version < lowest.version:
                lowest = comparator
            elif comparator.version > highest.version:
                highest = comparator

        # unbounded below: nothing can be lower than this alternative
        if lowest.operator in ("<", "<="):
            return False
        if highest.operator in ("", "<") and ver >= highest.version:
            return False
        if highest.operator == "<=" and ver > highest.version:
            return False
    return True


def is_fixed_version(range_text: Optional[str]) -> bool:
    """Return True when the first comparator carries no operator (an exact pin)."""
    if not valid_range(range_text):
        return False
    try:
        return comparator_sets(range_text)[0][0].operator == ""
    except ValueError:
        return False

"""Icon name to target-language identifier conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List

CASES = ("pascal", "camel", "snake", "kebab")

_WORD_PATTERN = re.compile(r"[A-Za-z0-9]+")

_SUFFIX_SEPARATORS = {"pascal": "", "camel": "", "snake": "_", "kebab": "-"}

DART_RESERVED: FrozenSet[str] = frozenset(
    {
        "abstract", "as", "assert", "async", "await", "break", "case", "catch",
        "class", "const", "continue", "covariant", "default", "deferred", "do",
        "dynamic", "else", "enum", "export", "extends", "extension", "external",
        "factory", "false", "final", "finally", "for", "function", "get", "hide",
        "if", "implements", "import", "in", "interface", "is", "late", "library",
        "mixin", "new", "null", "on", "operator", "part", "required", "rethrow",
        "return", "set", "show", "static", "super", "switch", "sync", "this",
        "throw", "true", "try", "typedef", "var", "void", "while", "with", "yield",
        # Members every Dart object already has.
        "hashcode", "runtimetype", "tostring", "nosuchmethod",
    }
)

REACT_RESERVED: FrozenSet[str] = frozenset({"React"})

# The text-icon component imports `Text` from react-native.
REACT_NATIVE_RESERVED: FrozenSet[str] = frozenset({"React", "Text"})


@dataclass(frozen=True)
class NamingPolicy:
    """How one target spells identifiers."""

    case: str
    font_name: str
    reserved: FrozenSet[str] = frozenset()
    case_sensitive_reserved: bool = False

    def __post_init__(self) -> None:
        if self.case not in CASES:
            raise ValueError(f"Unknown identifier case: {self.case}")

    def is_reserved(self, identifier: str) -> bool:
        if self.case_sensitive_reserved:
            return identifier in self.reserved
        lowered = identifier.lower()
        return any(lowered == word.lower() for word in self.reserved)


def split_words(raw: str) -> List[str]:
    return _WORD_PATTERN.findall(raw)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def join_words(words: Iterable[str], case: str) -> str:
    words = list(words)
    if case == "snake":
        return "_".join(word.lower() for word in words)
    if case == "kebab":
        return "-".join(word.lower() for word in words)
    pascal = "".join(_capitalize(word) for word in words)
    if case == "camel":
        return pascal[:1].lower() + pascal[1:]
    return pascal


def to_pascal_case(raw: str) -> str:
    return join_words(split_words(raw), "pascal")


def normalize(raw_name: str, policy: NamingPolicy) -> str:
    """Return the identifier `policy` uses for `raw_name`.

    Reserved names get the font name appended; names that would start with a
    digit get it prepended.
    """
    words = split_words(raw_name)
    font_words = split_words(policy.font_name)
    identifier = join_words(words, policy.case)
    if policy.is_reserved(identifier):
        identifier = join_words(words + font_words, policy.case)
    if not identifier or identifier[0].isdigit():
        identifier = join_words(font_words + words, policy.case)
    return identifier


def resolve_identifiers(
    names: Iterable[str], policy: NamingPolicy, *, taken: Iterable[str] = ()
) -> Dict[str, str]:
    """Map each name to a unique identifier, resolving clashes in input order.

    Identifiers are compared case-insensitively so that generated file names
    stay distinct on case-insensitive filesystems. The first name keeps the
    plain identifier; later clashing names get the smallest free numeric
    suffix starting at 2. Identifiers in `taken` are already in use by the
    target (file stems, base classes) and are never handed out.
    """
    separator = _SUFFIX_SEPARATORS[policy.case]
    resolved: Dict[str, str] = {}
    used = {identifier.casefold() for identifier in taken}
    for name in names:
        if name in resolved:
            continue
        base = normalize(name, policy)
        candidate = base
        counter = 2
        while candidate.casefold() in used:
            candidate = f"{base}{separator}{counter}"
            counter += 1
        used.add(candidate.casefold())
        resolved[name] = candidate
    return resolved


def react_policy(font_name: str) -> NamingPolicy:
    return NamingPolicy(case="pascal", font_name=font_name, reserved=REACT_RESERVED)


def react_native_policy(font_name: str) -> NamingPolicy:
    return NamingPolicy(case="pascal", font_name=font_name, reserved=REACT_NATIVE_RESERVED)


def flutter_member_policy(font_name: str) -> NamingPolicy:
    return NamingPolicy(case="camel", font_name=font_name, reserved=DART_RESERVED)


def dart_package_policy(font_name: str) -> NamingPolicy:
    return NamingPolicy(case="snake", font_name=font_name, reserved=DART_RESERVED)


def css_policy(font_name: str) -> NamingPolicy:
    return NamingPolicy(case="kebab", font_name=font_name)


__all__ = [
    "CASES",
    "NamingPolicy",
    "css_policy",
    "dart_package_policy",
    "flutter_member_policy",
    "join_words",
    "normalize",
    "react_native_policy",
    "react_policy",
    "resolve_identifiers",
    "split_words",
    "to_pascal_case",
]

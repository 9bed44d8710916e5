"""Tests for iconpack.naming."""

from __future__ import annotations

import pytest

from iconpack.naming import (
    NamingPolicy,
    css_policy,
    dart_package_policy,
    flutter_member_policy,
    normalize,
    react_native_policy,
    react_policy,
    resolve_identifiers,
    to_pascal_case,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("home", "Home"),
        ("arrow-up", "ArrowUp"),
        ("arrow_up_circle", "ArrowUpCircle"),
        ("chevronDown", "ChevronDown"),
        ("2fa", "Svgtofont2fa"),
        ("react", "ReactSvgtofont"),
        ("React", "ReactSvgtofont"),
        ("reactive", "Reactive"),
    ],
)
def test_react_identifiers(raw: str, expected: str) -> None:
    assert normalize(raw, react_policy("svgtofont")) == expected


def test_case_conventions() -> None:
    assert normalize("arrow-up", flutter_member_policy("my-font")) == "arrowUp"
    assert normalize("arrow-up", css_policy("my-font")) == "arrow-up"
    assert normalize("Arrow Up", dart_package_policy("my-font")) == "arrow_up"


def test_leading_digit_prefix_follows_case() -> None:
    assert normalize("2fa", flutter_member_policy("my-font")) == "myFont2fa"
    assert normalize("3d-box", css_policy("my-font")) == "my-font-3d-box"


def test_reserved_words_get_font_suffix() -> None:
    assert normalize("class", flutter_member_policy("svgtofont")) == "classSvgtofont"
    assert normalize("text", react_native_policy("svgtofont")) == "TextSvgtofont"


def test_case_sensitive_reserved_words() -> None:
    policy = NamingPolicy(case="pascal", font_name="x", reserved=frozenset({"React"}), case_sensitive_reserved=True)

    assert normalize("react", policy) == "ReactX"
    assert normalize("REACT", policy) == "REACT"


def test_normalize_is_deterministic() -> None:
    policy = react_policy("svgtofont")

    assert [normalize("2fa", policy) for _ in range(3)] == ["Svgtofont2fa"] * 3


def test_name_without_word_characters_falls_back_to_font_name() -> None:
    assert normalize("---", react_policy("svgtofont")) == "Svgtofont"


def test_unknown_case_is_rejected() -> None:
    with pytest.raises(ValueError):
        NamingPolicy(case="screaming", font_name="x")


def test_to_pascal_case() -> None:
    assert to_pascal_case("my-icon font") == "MyIconFont"


def test_resolve_identifiers_suffixes_later_collisions() -> None:
    resolved = resolve_identifiers(["arrow-up", "arrow_up", "arrowUp", "home"], react_policy("svgtofont"))

    assert resolved == {
        "arrow-up": "ArrowUp",
        "arrow_up": "ArrowUp2",
        "arrowUp": "ArrowUp3",
        "home": "Home",
    }


def test_resolve_identifiers_treats_case_variants_as_collisions() -> None:
    resolved = resolve_identifiers(["home", "HOME"], react_policy("svgtofont"))

    assert resolved == {"home": "Home", "HOME": "HOME2"}


def test_resolve_identifiers_uses_separator_for_snake_and_kebab() -> None:
    assert resolve_identifiers(["a-b", "a_b"], css_policy("f")) == {"a-b": "a-b", "a_b": "a-b-2"}
    assert resolve_identifiers(["a-b", "a b"], dart_package_policy("f")) == {"a-b": "a_b", "a b": "a_b_2"}


def test_resolve_identifiers_skips_suffixes_already_taken() -> None:
    resolved = resolve_identifiers(["home2", "home", "home-"], react_policy("f"))

    assert resolved == {"home2": "Home2", "home": "Home", "home-": "Home3"}


def test_resolve_identifiers_avoids_taken_identifiers() -> None:
    resolved = resolve_identifiers(["index", "home"], react_policy("f"), taken=["index"])

    assert resolved == {"index": "Index2", "home": "Home"}

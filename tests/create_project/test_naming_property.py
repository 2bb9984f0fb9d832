from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

import create_project.naming as naming

raw_names = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    max_size=40,
)


@given(raw_names)
def test_to_valid_package_name_is_idempotent(raw: str) -> None:
    once = naming.to_valid_package_name(raw)

    assert naming.to_valid_package_name(once) == once


@given(raw_names)
def test_to_valid_package_name_is_valid_or_empty(raw: str) -> None:
    normalized = naming.to_valid_package_name(raw)

    assert normalized == "" or naming.is_valid_package_name(normalized)


@given(raw_names)
def test_package_name_or_fallback_never_returns_empty(raw: str) -> None:
    assert naming.package_name_or_fallback(raw)

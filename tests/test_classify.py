# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for dependency classification."""

from __future__ import annotations

from typie.classify import classify, is_type_package, type_package_name


def test_type_package_name_prefixes_plain_names() -> None:
    assert type_package_name("left-pad") == "@types/left-pad"


def test_type_package_name_mangles_scoped_names() -> None:
    assert type_package_name("@babel/core") == "@types/babel__core"


def test_classify_splits_type_packages_from_candidates() -> None:
    result = classify({"lodash": "^4.0.0", "@types/lodash": "^4.0.0", "express": "^4.18.0"})

    assert result.already_typed == frozenset({"@types/lodash"})
    assert result.candidates == ("express", "lodash")
    assert is_type_package("@types/node")
    assert not is_type_package("@typescript-eslint/parser")


def test_classify_is_order_independent() -> None:
    first = classify(["b", "a", "@types/c"])
    second = classify(["@types/c", "a", "b"])

    assert first == second


def test_classify_accepts_empty_input() -> None:
    result = classify({})

    assert result.candidates == ()
    assert result.already_typed == frozenset()

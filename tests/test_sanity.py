"""Sanity tests ensuring the package modules import correctly."""

from __future__ import annotations

import importlib

import pytest


@pytest.mark.parametrize(
    "module_name",
    [
        "cardtable",
        "cardtable.cards",
        "cardtable.evaluation",
        "cardtable.games",
        "cardtable.sevens",
        "cardtable.history",
        "cardtable.benchmark",
        "cardtable.cli.main",
    ],
)
def test_modules_import(module_name: str) -> None:
    """Ensure all foundational modules can be imported."""

    assert importlib.import_module(module_name)

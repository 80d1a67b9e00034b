"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

from chesstree.core.rules import STARTING_FEN
from chesstree.tree.builder import build_from_moves
from chesstree.tree.node import VariationNode

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def open_game() -> tuple[VariationNode, VariationNode]:
    """``(root, cursor)`` after 1.e4 e5 2.Nf3 from the standard start."""
    return build_from_moves(["e4", "e5", "Nf3"], STARTING_FEN)

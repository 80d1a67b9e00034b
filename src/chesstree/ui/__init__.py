"""Qt integration for hosting an analysis session inside a PyQt6 UI."""

from chesstree.ui.session import VariationSession

__all__ = ["VariationSession"]

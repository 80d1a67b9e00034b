"""Session layer: the host-owned cursor slot and its settings.

Quick start::

    from chesstree.game import AnalysisController

    ctrl = AnalysisController()
    ctrl.events.on_cursor_changed.append(lambda node: print(node.position))
    ctrl.load_moves("e4 e5 Nf3")
    ctrl.undo_move()
"""

from chesstree.game.controller import AnalysisController, AnalysisEvents
from chesstree.game.settings import AnalysisSettings

__all__ = [
    "AnalysisController",
    "AnalysisEvents",
    "AnalysisSettings",
]

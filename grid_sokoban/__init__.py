"""Box-pushing puzzle engine.

Levels are parsed from the classic ASCII level-pack format into immutable
:class:`~grid_sokoban.levels.maze.Maze` values, and play proceeds by threading
an immutable :class:`~grid_sokoban.state.GameState` through the pure reducer in
:mod:`grid_sokoban.step`.
"""

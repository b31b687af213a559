"""Rendering subpackage.

Turns immutable :class:`~grid_sokoban.state.GameState` snapshots into images.
:mod:`grid_sokoban.renderer.pose` maps actor state to sprite keys and
:mod:`grid_sokoban.renderer.texture` composes Pillow images from them.
"""

"""Built-in level pack.

A handful of small hand-authored levels in the textual level-pack format,
including caption lines and one level too tall to be playable (it is
excluded by the loader). Useful as a default catalog for the Gym wrapper and
for demos.
"""

from grid_sokoban.levels.catalog import LevelCatalog
from grid_sokoban.levels.loader import (
    DEFAULT_LIMITS,
    LevelLimits,
    parse_levels,
    split_lines,
)


CLASSIC_PACK = """\
; Grid Sokoban starter pack
; Push every box onto a target.

#####
#@$.#
#####
; 1
Title: One Step

######
#    #
# $$ #
# .. #
#  @ #
######
; 2
Title: Two Down

#######
#+ $  #
# *   #
#  $. #
#######
; 3
Title: Corners

###
#@#
# #
# #
# #
# #
# #
# #
# #
#$#
# #
#.#
###
; 4
Title: Too Tall

  ####
###  ####
#     $ #
# #  #$ #
# ..  @ #
#########
; 5
Title: Side Step
"""


def load_classic(limits: LevelLimits = DEFAULT_LIMITS) -> LevelCatalog:
    """Parse :data:`CLASSIC_PACK` into a catalog (four playable levels)."""
    return parse_levels(split_lines(CLASSIC_PACK), limits)

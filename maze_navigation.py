"""
Player movement rules
"""

from collections import namedtuple
from enum import Enum

from maze_cell import OFFSETS


class Direction(Enum):
    UP = 'top'
    RIGHT = 'right'
    DOWN = 'bottom'
    LEFT = 'left'

    @property
    def side(self):
        """Wall side crossed when moving this way"""
        return self.value

    @property
    def offset(self):
        return OFFSETS[self.value]


MoveResult = namedtuple('MoveResult', ['moved', 'reached_goal'])

REJECTED = MoveResult(False, False)


def can_move(maze, direction):
    """Whether the player may cross the current cell's wall in this direction"""
    if not maze.generation_complete:
        return False

    cell = maze.current_cell
    side = direction.side

    if cell.walls[side].is_shown:
        return False

    destination = maze.neighbor(cell, side)
    if destination is None or destination.is_rotating:
        return False

    # The wall sweeping out of its slot still blocks the way out
    if cell.is_rotating and cell.wall_to_rotate == side:
        return False

    return True


def attempt_move(maze, direction):
    """Move the player one cell; returns MoveResult(moved, reached_goal)"""
    if not can_move(maze, direction):
        return REJECTED

    destination = maze.neighbor(maze.current_cell, direction.side)
    maze.current_cell = destination

    return MoveResult(True, destination.is_goal)

"""
Game settings - difficulty tiers, game modes and their timing
"""

from enum import Enum


class Difficulty(Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'
    IMPOSSIBLE = 'impossible'


class GameMode(Enum):
    DEFAULT = 'default'
    MEMORY = 'memory'
    FRANTIC = 'frantic'


# (rows, columns) per difficulty
DIFFICULTY_DIMENSIONS = {
    Difficulty.EASY: (10, 10),
    Difficulty.MEDIUM: (15, 15),
    Difficulty.HARD: (20, 20),
    Difficulty.IMPOSSIBLE: (30, 30),
}

GAME_MODE_DESCRIPTIONS = {
    GameMode.DEFAULT: "Find your way to the green square.",
    GameMode.MEMORY: "The maze only shows itself for a moment every few seconds.",
    GameMode.FRANTIC: "Every few seconds walls spin round. Don't get caught!",
}

# Frantic mode: a scramble cycle starts every FRANTIC_INTERVAL seconds of play
FRANTIC_INTERVAL = 3
SCRAMBLE_CELLS_PER_ROW = 2

# Memory mode: maze visible for the first MEMORY_REVEAL_TIME seconds, then
# once every MEMORY_PERIOD seconds
MEMORY_REVEAL_TIME = 3
MEMORY_PERIOD = 5

# Bounded rejection sampling when picking cells to rotate
MAX_SELECTION_ATTEMPTS_PER_CELL = 50

# Frame pacing
FPS = 90
GENERATION_STEPS_PER_FRAME = 4

MAZE_COLORS = {
    'white': (255, 255, 255),
    'red': (247, 5, 5),
    'orange': (255, 140, 0),
    'yellow': (223, 230, 34),
    'green': (83, 247, 43),
    'blue': (66, 236, 245),
    'purple': (148, 0, 211),
    'mixed': None,
    'mixed-animated': None,
}

# Colour the maze is drawn on
BACKGROUND_COLORS = {
    'midnight': (12, 12, 24),
    'black': (0, 0, 0),
    'gray': (60, 60, 60),
    'navy': (10, 20, 70),
    'forest': (10, 50, 20),
    'plum': (50, 10, 50),
}
DEFAULT_BACKGROUND = 'midnight'

# Palette used by the mixed wall colours
MIXED_PALETTE = [
    (255, 255, 255),
    (66, 236, 245),
    (125, 179, 189),
    (247, 5, 5),
    (223, 230, 34),
    (83, 247, 43),
    (255, 140, 0),
    (148, 0, 211),
]


def dimensions_for(difficulty):
    """Rows and columns for a difficulty (enum member or its name)"""
    return DIFFICULTY_DIMENSIONS[Difficulty(difficulty)]


def scramble_cell_count(difficulty):
    """Number of cells rotating in one frantic-mode cycle"""
    rows, _ = dimensions_for(difficulty)
    return scramble_cells_for_rows(rows)


def scramble_cells_for_rows(rows):
    return rows * SCRAMBLE_CELLS_PER_ROW


def memory_mode_visible(seconds):
    """Whether the maze is drawn at this many elapsed seconds in memory mode"""
    if seconds <= MEMORY_REVEAL_TIME:
        return True
    return (seconds % MEMORY_PERIOD) - MEMORY_REVEAL_TIME == 0


def frantic_cycle_due(seconds):
    """Whether this elapsed second starts a scramble cycle in frantic mode"""
    return seconds != 0 and seconds % FRANTIC_INTERVAL == 0

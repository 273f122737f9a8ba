"""
Maze cells - wall records and the angle-based wall rotation animation
"""

# Wall sides in the fixed order used by shown_walls()
TOP = 'top'
RIGHT = 'right'
BOTTOM = 'bottom'
LEFT = 'left'
SIDES = (TOP, RIGHT, BOTTOM, LEFT)

# Resting angle of each wall in degrees; a rotation sweeps 90 degrees past it
RESTING_THETA = {TOP: 0, RIGHT: 90, BOTTOM: 180, LEFT: 270}
ROTATION_SWEEP = 90
ROTATION_STEP = 2
ROTATION_TICKS = ROTATION_SWEEP // ROTATION_STEP  # 45

# A rotating wall sweeps into the next side counter-clockwise
ROTATES_INTO = {TOP: LEFT, RIGHT: TOP, BOTTOM: RIGHT, LEFT: BOTTOM}

OPPOSITE = {TOP: BOTTOM, RIGHT: LEFT, BOTTOM: TOP, LEFT: RIGHT}

# (row, column) offset of the neighbor across each side
OFFSETS = {TOP: (-1, 0), RIGHT: (0, 1), BOTTOM: (1, 0), LEFT: (0, -1)}


class Wall:
    """One side of a cell"""

    def __init__(self, side):
        self.side = side
        self.is_shown = True
        self.theta = RESTING_THETA[side]
        self.max_theta = RESTING_THETA[side] + ROTATION_SWEEP

    def reset_angle(self):
        self.theta = RESTING_THETA[self.side]

    def __repr__(self):
        return f"Wall({self.side}, shown={self.is_shown}, theta={self.theta})"


class Cell:
    """A single grid unit with four walls

    Cells only know their own coordinates. Anything that involves a neighbor
    (removing a shared wall, opening or closing the far side of a rotating
    wall) goes through MazeTopology, which looks neighbors up by index.
    """

    def __init__(self, row, column):
        self._row = row
        self._column = column

        self.visited = False
        self.is_goal = False
        self.is_rotating = False
        self.wall_to_rotate = None
        self.rotation_progress = 0

        self.walls = {side: Wall(side) for side in SIDES}

    @property
    def row(self):
        return self._row

    @property
    def column(self):
        return self._column

    @property
    def position(self):
        return (self._row, self._column)

    def shown_walls(self):
        """Shown flags as [top, right, bottom, left]"""
        return [self.walls[side].is_shown for side in SIDES]

    def open_wall_count(self):
        return sum(1 for shown in self.shown_walls() if not shown)

    def start_rotation(self, side):
        """Arm a rotation of the given wall; advance_rotation() animates it"""
        self.wall_to_rotate = side
        self.rotation_progress = 0
        self.is_rotating = True

    def advance_rotation(self):
        """Advance the armed rotation by one step

        Returns 'started' on the first step, 'completed' on the step that
        reaches max_theta, 'rotating' in between and None when no rotation is
        armed. The caller applies the effects on the neighbors.
        """
        if not self.is_rotating or self.wall_to_rotate is None:
            return None

        wall = self.walls[self.wall_to_rotate]
        first_step = self.rotation_progress == 0

        wall.theta += ROTATION_STEP
        self.rotation_progress += 1

        if wall.theta >= wall.max_theta:
            self._finish_rotation()
            return 'completed'

        return 'started' if first_step else 'rotating'

    def _finish_rotation(self):
        # Shown flags are owned by MazeTopology.set_wall so both copies stay in step
        self.walls[self.wall_to_rotate].reset_angle()
        self.walls[ROTATES_INTO[self.wall_to_rotate]].reset_angle()
        self.is_rotating = False

    def clear_rotation(self):
        """Forget the wall chosen for the previous cycle"""
        if self.wall_to_rotate is not None:
            self.walls[self.wall_to_rotate].reset_angle()
        self.wall_to_rotate = None
        self.rotation_progress = 0
        self.is_rotating = False

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return self.position == other.position

    def __hash__(self):
        return hash(self.position)

    def __repr__(self):
        return f"Cell({self._row}, {self._column}, visited={self.visited}, walls={self.shown_walls()})"

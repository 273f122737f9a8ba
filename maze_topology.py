"""
Maze topology - DFS generation and frantic-mode wall scrambling

The grid owns every cell. Cells never reach their neighbors directly; all
neighbor access goes through (row, column) lookups here, and every change to a
shown flag goes through set_wall() so the two copies of a shared wall agree.
"""

import random
from collections import deque

from maze_cell import (
    Cell, SIDES, TOP, RIGHT, BOTTOM, LEFT, OPPOSITE, OFFSETS, ROTATES_INTO, ROTATION_TICKS
)
from maze_settings import (
    MAX_SELECTION_ATTEMPTS_PER_CELL, dimensions_for, scramble_cell_count, scramble_cells_for_rows
)


class InvalidAdjacencyError(ValueError):
    """Raised when a wall operation names cells or sides that do not share a wall"""


class MazeTopology:
    """A rows x columns maze with a step-wise DFS generator and wall rotation"""

    def __init__(self, rows, columns, seed=None, scramble_count=None, preserve_connectivity=True):
        if rows < 1 or columns < 1:
            raise ValueError(f"maze needs at least one cell, got {rows}x{columns}")

        self.rows = rows
        self.columns = columns
        self.random = random.Random(seed)
        self.preserve_connectivity = preserve_connectivity
        self.scramble_count = scramble_count if scramble_count is not None else scramble_cells_for_rows(rows)

        self.grid = [[Cell(row, column) for column in range(columns)] for row in range(rows)]
        self.stack = []
        self.removed_walls = 0

        # Scramble state
        self.cells_to_rotate = []
        self.scramble_active = False
        self.scramble_tick = 0

        # Start and goal
        self.current_cell = self.grid[0][0]
        self.current_cell.visited = True
        self.goal_cell = self.grid[rows - 1][columns - 1]
        self.goal_cell.is_goal = True

        # A single cell has nothing to carve
        self.generation_complete = rows * columns == 1

    @classmethod
    def for_difficulty(cls, difficulty, seed=None, preserve_connectivity=True):
        """Build an ungenerated maze sized for a difficulty tier"""
        rows, columns = dimensions_for(difficulty)
        return cls(rows, columns, seed=seed, scramble_count=scramble_cell_count(difficulty),
                   preserve_connectivity=preserve_connectivity)

    # ------------------------------------------------------------------
    # Grid access

    def in_bounds(self, row, column):
        return 0 <= row < self.rows and 0 <= column < self.columns

    def cell_at(self, row, column):
        if not self.in_bounds(row, column):
            raise IndexError(f"({row}, {column}) is outside a {self.rows}x{self.columns} maze")
        return self.grid[row][column]

    def cells(self):
        for row in self.grid:
            yield from row

    def neighbor(self, cell, side):
        """The cell across the given side, or None on the border"""
        dr, dc = OFFSETS[side]
        row, column = cell.row + dr, cell.column + dc
        if self.in_bounds(row, column):
            return self.grid[row][column]
        return None

    def is_border(self, cell, side):
        return self.neighbor(cell, side) is None

    def random_unvisited_neighbor(self, cell):
        """Uniformly random in-bounds unvisited neighbor, or None"""
        candidates = []
        for side in SIDES:
            other = self.neighbor(cell, side)
            if other is not None and not other.visited:
                candidates.append(other)

        if not candidates:
            return None
        return self.random.choice(candidates)

    @staticmethod
    def side_between(cell_a, cell_b):
        """Side of cell_a that faces cell_b"""
        offset = (cell_b.row - cell_a.row, cell_b.column - cell_a.column)
        for side, side_offset in OFFSETS.items():
            if offset == side_offset:
                return side
        raise InvalidAdjacencyError(f"{cell_a.position} and {cell_b.position} are not adjacent")

    # ------------------------------------------------------------------
    # Walls

    def set_wall(self, cell, side, shown):
        """Show or hide a wall on both cells that share it"""
        cell.walls[side].is_shown = shown
        other = self.neighbor(cell, side)
        if other is not None:
            other.walls[OPPOSITE[side]].is_shown = shown

    def remove_walls(self, cell_a, cell_b):
        """Open the wall shared by two orthogonally adjacent cells"""
        side = self.side_between(cell_a, cell_b)
        if cell_a.walls[side].is_shown:
            self.removed_walls += 1
        self.set_wall(cell_a, side, False)

    def is_open(self, cell, side):
        return not cell.walls[side].is_shown

    # ------------------------------------------------------------------
    # Generation

    def step_generation(self):
        """Advance the DFS backtracker by one step; returns generation_complete"""
        if self.generation_complete:
            return True

        self.current_cell.visited = True

        next_cell = self.random_unvisited_neighbor(self.current_cell)

        if next_cell is not None:
            next_cell.visited = True
            self.stack.append(self.current_cell)
            self.remove_walls(self.current_cell, next_cell)
            self.current_cell = next_cell
        elif self.stack:
            # Dead end, backtrack
            self.current_cell = self.stack.pop()

        if not self.stack:
            self.generation_complete = True

        return self.generation_complete

    def generate(self):
        """Run generation to completion"""
        while not self.step_generation():
            pass
        return self

    def generation_progress(self):
        """Fraction of cells visited so far"""
        visited = sum(1 for cell in self.cells() if cell.visited)
        return visited / (self.rows * self.columns)

    # ------------------------------------------------------------------
    # Connectivity

    @staticmethod
    def _edge_key(cell, side):
        dr, dc = OFFSETS[side]
        a, b = cell.position, (cell.row + dr, cell.column + dc)
        return (a, b) if a < b else (b, a)

    def _open_neighbors(self, cell, extra_open=(), extra_closed=()):
        for side in SIDES:
            other = self.neighbor(cell, side)
            if other is None:
                continue
            key = self._edge_key(cell, side)
            if key in extra_closed:
                continue
            if key in extra_open or not cell.walls[side].is_shown:
                yield other

    def reachable_count(self, extra_open=(), extra_closed=()):
        """Number of cells reachable from (0, 0) through open walls

        extra_open and extra_closed are edge keys treated as open or closed
        regardless of the current wall state.
        """
        start = self.grid[0][0]
        seen = {start.position}
        queue = deque([start])

        while queue:
            cell = queue.popleft()
            for other in self._open_neighbors(cell, extra_open, extra_closed):
                if other.position not in seen:
                    seen.add(other.position)
                    queue.append(other)

        return len(seen)

    def is_connected(self, extra_open=(), extra_closed=()):
        return self.reachable_count(extra_open, extra_closed) == self.rows * self.columns

    def rotation_keeps_connected(self, cell, side, extra_open=(), extra_closed=()):
        """Whether rotating cell's side wall leaves a connected maze in one piece

        The maze must already be connected with extra_open and extra_closed
        applied. Closing the slot the wall sweeps into can at most split it in
        two: the part holding cell and the part holding the cell across that
        slot. Both parts are searched a cell at a time, so the smaller one runs
        out first and decides whether the wall's old slot joins them again.
        """
        target = self.neighbor(cell, side)
        partner = self.neighbor(cell, ROTATES_INTO[side])
        extra_closed = set(extra_closed)
        extra_closed.add(self._edge_key(cell, ROTATES_INTO[side]))

        near_seen, far_seen = {cell.position}, {partner.position}
        near_queue, far_queue = deque([cell]), deque([partner])
        searches = ((near_seen, near_queue, far_seen), (far_seen, far_queue, near_seen))

        while near_queue and far_queue:
            for seen, queue, other_seen in searches:
                if not queue:
                    break
                current = queue.popleft()
                for other in self._open_neighbors(current, extra_open, extra_closed):
                    if other.position in other_seen:
                        # Still joined without the slot
                        return True
                    if seen is far_seen and other is target:
                        return True
                    if other.position not in seen:
                        seen.add(other.position)
                        queue.append(other)

        if not near_queue:
            return target.position not in near_seen
        return target.position in far_seen

    # ------------------------------------------------------------------
    # Scramble selection

    def has_rotatable_walls(self, cell):
        """More shown walls than shown walls on the outer border"""
        shown = 0
        border = 0
        for side in SIDES:
            if cell.walls[side].is_shown:
                shown += 1
                if self.is_border(cell, side):
                    border += 1
        return shown > border

    def _touches(self, cell, chosen):
        for side in SIDES:
            other = self.neighbor(cell, side)
            if other is not None and other in chosen:
                return True
        return False

    def select_cells_to_rotate(self, count=None):
        """Pick up to count random cells that can rotate a wall this cycle

        Rejection sampling is capped; on small or awkward mazes fewer cells
        than requested may come back.
        """
        requested = self.scramble_count if count is None else count

        for cell in self.cells_to_rotate:
            cell.clear_rotation()

        chosen = []
        attempts = 0
        max_attempts = MAX_SELECTION_ATTEMPTS_PER_CELL * requested

        while len(chosen) < requested and attempts < max_attempts:
            attempts += 1
            cell = self.grid[self.random.randrange(self.rows)][self.random.randrange(self.columns)]

            if cell.is_goal or cell in chosen:
                continue
            if not self.has_rotatable_walls(cell):
                continue
            if self._touches(cell, chosen):
                continue

            chosen.append(cell)

        if len(chosen) < requested:
            print(f"Scramble selection exhausted: rotating {len(chosen)} of {requested} cells")

        self.cells_to_rotate = chosen
        return chosen

    def choose_wall_to_rotate(self, cell):
        """First wall in priority order that has a closed-off slot to sweep into"""
        top, right, bottom, left = cell.shown_walls()

        if top and not left and not self.is_border(cell, TOP):
            return TOP
        if right and not top and not self.is_border(cell, RIGHT):
            return RIGHT
        if bottom and not right and not self.is_border(cell, BOTTOM):
            return BOTTOM
        if left and not bottom and not self.is_border(cell, LEFT):
            return LEFT

        return None

    # ------------------------------------------------------------------
    # Rotation

    def start_cell_rotation(self, cell, side):
        if self.is_border(cell, side):
            raise InvalidAdjacencyError(f"cannot rotate the {side} border wall of {cell.position}")
        cell.start_rotation(side)

    def advance_cell_rotation(self, cell):
        """Advance one cell's rotation and apply it to the neighbors"""
        status = cell.advance_rotation()
        side = cell.wall_to_rotate

        if status == 'started':
            # The wall is sweeping now; its slot no longer blocks either cell
            self.set_wall(cell, side, False)
        elif status == 'completed':
            self.set_wall(cell, side, False)
            self.set_wall(cell, ROTATES_INTO[side], True)

        return status

    def begin_scramble(self):
        """Start a scramble cycle; a no-op while one is running

        The cycle only becomes active when at least one cell was selected.
        """
        if not self.generation_complete or self.scramble_active:
            return self.cells_to_rotate

        self.select_cells_to_rotate()
        self.scramble_tick = 0
        self.scramble_active = bool(self.cells_to_rotate)
        return self.cells_to_rotate

    def advance_scramble(self):
        """Advance the active scramble cycle by one tick

        Walls are chosen on the first tick. Returns whether the cycle is still
        running afterwards.
        """
        if not self.scramble_active:
            return False

        pending_open = set()
        pending_closed = set()

        for cell in self.cells_to_rotate:
            if self.scramble_tick == 0:
                side = self.choose_wall_to_rotate(cell)
                if side is not None and self.preserve_connectivity:
                    if self.rotation_keeps_connected(cell, side, pending_open, pending_closed):
                        pending_open.add(self._edge_key(cell, side))
                        pending_closed.add(self._edge_key(cell, ROTATES_INTO[side]))
                    else:
                        side = None

                if side is None:
                    cell.clear_rotation()
                    continue
                self.start_cell_rotation(cell, side)

            self.advance_cell_rotation(cell)

        self.scramble_tick += 1
        if self.scramble_tick >= ROTATION_TICKS or not self.rotating_cells():
            self.scramble_active = False

        return self.scramble_active

    def rotating_cells(self):
        return [cell for cell in self.cells_to_rotate if cell.is_rotating]

    def __repr__(self):
        return f"MazeTopology({self.rows}x{self.columns}, complete={self.generation_complete})"

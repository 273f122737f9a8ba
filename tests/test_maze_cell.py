import unittest

from maze_cell import Cell, SIDES, RESTING_THETA, ROTATION_TICKS, TOP, RIGHT, LEFT


class TestCellWalls(unittest.TestCase):

    def test_new_cell_has_all_walls_at_rest(self):
        cell = Cell(2, 3)
        self.assertEqual(cell.shown_walls(), [True, True, True, True])
        for side in SIDES:
            wall = cell.walls[side]
            self.assertEqual(wall.theta, RESTING_THETA[side])
            self.assertEqual(wall.max_theta, RESTING_THETA[side] + 90)
        self.assertFalse(cell.visited)
        self.assertFalse(cell.is_goal)
        self.assertFalse(cell.is_rotating)
        self.assertIsNone(cell.wall_to_rotate)

    def test_shown_walls_order_is_top_right_bottom_left(self):
        cell = Cell(0, 0)
        cell.walls['right'].is_shown = False
        cell.walls['left'].is_shown = False
        self.assertEqual(cell.shown_walls(), [True, False, True, False])
        self.assertEqual(cell.open_wall_count(), 2)

    def test_position_is_read_only(self):
        cell = Cell(1, 4)
        self.assertEqual(cell.position, (1, 4))
        with self.assertRaises(AttributeError):
            cell.row = 3


class TestCellEquality(unittest.TestCase):

    def test_equal_by_coordinates(self):
        a = Cell(1, 2)
        b = Cell(1, 2)
        b.visited = True
        self.assertEqual(a, b)
        self.assertNotEqual(a, Cell(2, 1))
        self.assertEqual(len({a, b, Cell(2, 1)}), 2)

    def test_not_equal_to_other_types(self):
        self.assertNotEqual(Cell(0, 0), (0, 0))


class TestCellRotation(unittest.TestCase):

    def test_rotation_completes_on_the_45th_step(self):
        cell = Cell(1, 1)
        cell.start_rotation(TOP)

        statuses = [cell.advance_rotation() for _ in range(ROTATION_TICKS)]

        self.assertEqual(ROTATION_TICKS, 45)
        self.assertEqual(statuses[0], 'started')
        self.assertEqual(statuses[1:-1], ['rotating'] * (ROTATION_TICKS - 2))
        self.assertEqual(statuses[-1], 'completed')
        self.assertFalse(cell.is_rotating)
        self.assertEqual(cell.rotation_progress, ROTATION_TICKS)

    def test_theta_advances_two_degrees_per_step(self):
        cell = Cell(1, 1)
        cell.start_rotation(RIGHT)
        cell.advance_rotation()
        self.assertEqual(cell.walls[RIGHT].theta, 92)
        for _ in range(10):
            cell.advance_rotation()
        self.assertEqual(cell.walls[RIGHT].theta, 112)
        self.assertTrue(cell.is_rotating)

    def test_completion_resets_both_angles(self):
        cell = Cell(1, 1)
        cell.start_rotation(LEFT)
        for _ in range(ROTATION_TICKS):
            cell.advance_rotation()
        self.assertEqual(cell.walls[LEFT].theta, RESTING_THETA[LEFT])
        self.assertEqual(cell.walls['bottom'].theta, RESTING_THETA['bottom'])

    def test_extra_steps_after_completion_do_nothing(self):
        cell = Cell(1, 1)
        cell.start_rotation(TOP)
        for _ in range(ROTATION_TICKS):
            cell.advance_rotation()
        self.assertIsNone(cell.advance_rotation())
        self.assertEqual(cell.walls[TOP].theta, RESTING_THETA[TOP])

    def test_advance_without_rotation_is_noop(self):
        cell = Cell(0, 0)
        self.assertIsNone(cell.advance_rotation())
        self.assertEqual(cell.walls[TOP].theta, 0)

    def test_clear_rotation(self):
        cell = Cell(0, 0)
        cell.start_rotation(TOP)
        cell.advance_rotation()
        cell.clear_rotation()
        self.assertFalse(cell.is_rotating)
        self.assertIsNone(cell.wall_to_rotate)
        self.assertEqual(cell.rotation_progress, 0)


if __name__ == '__main__':
    unittest.main()

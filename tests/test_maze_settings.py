import unittest

from maze_settings import (
    Difficulty, GameMode, DIFFICULTY_DIMENSIONS, GAME_MODE_DESCRIPTIONS,
    BACKGROUND_COLORS, DEFAULT_BACKGROUND,
    dimensions_for, scramble_cell_count, memory_mode_visible, frantic_cycle_due
)


class TestDifficulty(unittest.TestCase):

    def test_dimensions(self):
        self.assertEqual(dimensions_for(Difficulty.EASY), (10, 10))
        self.assertEqual(dimensions_for('impossible'), (30, 30))
        self.assertEqual(len(DIFFICULTY_DIMENSIONS), len(Difficulty))

    def test_unknown_difficulty(self):
        with self.assertRaises(ValueError):
            dimensions_for('nightmare')

    def test_scramble_count_is_twice_the_rows(self):
        self.assertEqual(scramble_cell_count(Difficulty.EASY), 20)
        self.assertEqual(scramble_cell_count(Difficulty.HARD), 40)

    def test_default_background_is_a_choice(self):
        self.assertIn(DEFAULT_BACKGROUND, BACKGROUND_COLORS)

    def test_every_mode_described(self):
        for mode in GameMode:
            self.assertIn(mode, GAME_MODE_DESCRIPTIONS)


class TestModeTiming(unittest.TestCase):

    def test_memory_mode_schedule(self):
        visible = [s for s in range(20) if memory_mode_visible(s)]
        self.assertEqual(visible, [0, 1, 2, 3, 8, 13, 18])

    def test_frantic_schedule(self):
        due = [s for s in range(13) if frantic_cycle_due(s)]
        self.assertEqual(due, [3, 6, 9, 12])


if __name__ == '__main__':
    unittest.main()

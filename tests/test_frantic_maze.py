import unittest

from frantic_maze import PlayTimer, next_in_cycle, parse_args, wall_segment
from maze_cell import RESTING_THETA
from maze_settings import DEFAULT_BACKGROUND, GameMode


class FakeClock:

    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestWallSegment(unittest.TestCase):

    def assertPointAlmostEqual(self, actual, expected):
        self.assertAlmostEqual(actual[0], expected[0])
        self.assertAlmostEqual(actual[1], expected[1])

    def test_resting_walls_trace_the_cell_outline(self):
        x, y, size = 10, 20, 30
        expected = {
            'top': ((10, 20), (40, 20)),
            'right': ((40, 20), (40, 50)),
            'bottom': ((40, 50), (10, 50)),
            'left': ((10, 50), (10, 20)),
        }
        for side, (start, end) in expected.items():
            seg_start, seg_end = wall_segment(x, y, size, side, RESTING_THETA[side])
            self.assertPointAlmostEqual(seg_start, start)
            self.assertPointAlmostEqual(seg_end, end)

    def test_fully_rotated_top_lies_on_the_left_edge(self):
        start, end = wall_segment(0, 0, 10, 'top', 90)
        self.assertPointAlmostEqual(start, (0, 0))
        self.assertPointAlmostEqual(end, (0, 10))


class TestPlayTimer(unittest.TestCase):

    def test_counts_whole_seconds(self):
        clock = FakeClock()
        timer = PlayTimer(clock)
        timer.start()
        clock.now += 2.7
        self.assertEqual(timer.seconds, 2)
        self.assertTrue(timer.running)

    def test_pause_stops_the_clock(self):
        clock = FakeClock()
        timer = PlayTimer(clock)
        timer.start()
        clock.now += 3
        timer.pause()
        clock.now += 50
        self.assertEqual(timer.seconds, 3)
        self.assertFalse(timer.running)
        timer.resume()
        clock.now += 1
        self.assertEqual(timer.seconds, 4)

    def test_start_resets(self):
        clock = FakeClock()
        timer = PlayTimer(clock)
        timer.start()
        clock.now += 9
        timer.stop()
        timer.start()
        self.assertEqual(timer.seconds, 0)


class TestCommandLine(unittest.TestCase):

    def test_defaults(self):
        args = parse_args([])
        self.assertEqual(args.difficulty, 'easy')
        self.assertEqual(args.mode, 'default')
        self.assertEqual(args.wall_color, 'white')
        self.assertEqual(args.background_color, DEFAULT_BACKGROUND)
        self.assertFalse(args.windowed)
        self.assertIsNone(args.seed)

    def test_options(self):
        args = parse_args(['--difficulty', 'hard', '--mode', 'frantic', '--wall-color', 'mixed',
                           '--background-color', 'navy', '--windowed', '--seed', '7'])
        self.assertEqual(args.difficulty, 'hard')
        self.assertEqual(args.mode, 'frantic')
        self.assertEqual(args.wall_color, 'mixed')
        self.assertEqual(args.background_color, 'navy')
        self.assertTrue(args.windowed)
        self.assertEqual(args.seed, 7)

    def test_rejects_unknown_difficulty(self):
        with self.assertRaises(SystemExit):
            parse_args(['--difficulty', 'nightmare'])

    def test_rejects_unknown_background(self):
        with self.assertRaises(SystemExit):
            parse_args(['--background-color', 'mauve'])

    def test_next_in_cycle_wraps(self):
        self.assertEqual(next_in_cycle(GameMode, GameMode.DEFAULT), GameMode.MEMORY)
        self.assertEqual(next_in_cycle(GameMode, GameMode.FRANTIC), GameMode.DEFAULT)
        self.assertEqual(next_in_cycle({'a': 1, 'b': 2}, 'b'), 'a')


if __name__ == '__main__':
    unittest.main()

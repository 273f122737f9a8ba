#!/usr/bin/env python3
"""
Frantic Maze - a maze game where the walls don't stay put

The maze is carved live by a depth-first backtracker, then the player steers
to the green goal with the arrow keys. In frantic mode walls spin round every
few seconds; in memory mode the maze only shows itself now and then.
"""

import argparse
import math
import random
import threading
import time
from enum import Enum

import numpy as np
import pygame

from maze_navigation import Direction, attempt_move
from maze_settings import (
    Difficulty, GameMode, GAME_MODE_DESCRIPTIONS, DIFFICULTY_DIMENSIONS, MAZE_COLORS, MIXED_PALETTE,
    BACKGROUND_COLORS, DEFAULT_BACKGROUND,
    FPS, GENERATION_STEPS_PER_FRAME, frantic_cycle_due, memory_mode_visible
)
from maze_topology import MazeTopology

# Layout
MAZE_MARGIN = 120
WINDOW_SIZE = (1080, 1080)
WALL_WIDTH = 3

# Colors
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY = (100, 100, 100)
DARK_GRAY = (50, 50, 50)
GREEN = (83, 247, 43)
YELLOW = (255, 255, 0)
RED = (255, 0, 0)
ORANGE = (255, 165, 0)
CYAN = (0, 255, 255)
PLAYER_BODY = (255, 140, 0)
PLAYER_DARK = (200, 100, 0)

# Wall start corner relative to the cell's top-left corner, in wall lengths
WALL_ANCHORS = {
    'top': (0, 0),
    'right': (1, 0),
    'bottom': (1, 1),
    'left': (0, 1),
}

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
}

DIFFICULTY_KEYS = {
    pygame.K_1: Difficulty.EASY,
    pygame.K_2: Difficulty.MEDIUM,
    pygame.K_3: Difficulty.HARD,
    pygame.K_4: Difficulty.IMPOSSIBLE,
}


class GameState(Enum):
    TITLE = 1
    GENERATING = 2
    PLAYING = 3
    PAUSED = 4
    GAME_OVER = 5


def wall_segment(x, y, length, side, theta):
    """Screen endpoints of a wall drawn from its anchor corner at angle theta"""
    ax, ay = WALL_ANCHORS[side]
    x1 = x + ax * length
    y1 = y + ay * length
    x2 = x1 + length * math.cos(math.radians(theta))
    y2 = y1 + length * math.sin(math.radians(theta))
    return (x1, y1), (x2, y2)


def next_in_cycle(options, current):
    """Option after current, wrapping round"""
    options = list(options)
    return options[(options.index(current) + 1) % len(options)]


class PlayTimer:
    """Counts whole seconds of play, stopping while paused"""

    def __init__(self, clock=time.time):
        self.clock = clock
        self.elapsed = 0.0
        self.started_at = None

    def start(self):
        self.elapsed = 0.0
        self.started_at = self.clock()

    def pause(self):
        if self.started_at is not None:
            self.elapsed += self.clock() - self.started_at
            self.started_at = None

    def resume(self):
        if self.started_at is None:
            self.started_at = self.clock()

    def stop(self):
        self.pause()

    @property
    def running(self):
        return self.started_at is not None

    @property
    def seconds(self):
        total = self.elapsed
        if self.started_at is not None:
            total += self.clock() - self.started_at
        return int(total)


class SoundGenerator:
    """Generate simple synthesized sounds"""

    @staticmethod
    def generate_tone(frequency, duration, volume=0.3, wave_type='sine'):
        """Generate a tone with given frequency and duration"""
        sample_rate = 44100
        n_samples = int(sample_rate * duration)
        t = np.linspace(0, duration, n_samples, False)

        if wave_type == 'square':
            wave = np.sign(np.sin(2 * np.pi * frequency * t))
        elif wave_type == 'sawtooth':
            wave = 2 * (t * frequency - np.floor(0.5 + t * frequency))
        else:
            wave = np.sin(2 * np.pi * frequency * t)

        # Fade in and out to avoid clicks
        envelope = np.ones(n_samples)
        attack = int(0.01 * sample_rate)
        release = int(0.05 * sample_rate)
        envelope[:attack] = np.linspace(0, 1, attack)
        envelope[-release:] = np.linspace(1, 0, release)

        wave = (wave * envelope * volume * 32767).astype(np.int16)
        return pygame.sndarray.make_sound(np.column_stack((wave, wave)))

    @staticmethod
    def generate_move_sound():
        return SoundGenerator.generate_tone(440, 0.05, 0.2, 'sine')

    @staticmethod
    def generate_bump_sound():
        """Thud for walking into a wall"""
        return SoundGenerator.generate_tone(100, 0.1, 0.3, 'square')

    @staticmethod
    def generate_rotate_walls_sound():
        """Rising whirr while walls spin"""
        return [SoundGenerator.generate_tone(300 + i * 60, 0.06, 0.2, 'sawtooth') for i in range(6)]

    @staticmethod
    def generate_game_over_sound():
        """Fanfare for reaching the goal"""
        return [
            SoundGenerator.generate_tone(523, 0.1, 0.3, 'sine'),   # C
            SoundGenerator.generate_tone(659, 0.1, 0.3, 'sine'),   # E
            SoundGenerator.generate_tone(784, 0.1, 0.3, 'sine'),   # G
            SoundGenerator.generate_tone(1047, 0.2, 0.3, 'sine'),  # High C
        ]


class PlayerSprite:
    """Vector drawing of the player, a small round critter"""

    def __init__(self):
        self.facing = Direction.RIGHT
        self.animation_frame = 0

    def draw(self, surface, cx, cy, cell_size):
        radius = max(3, int(cell_size / 3))

        pygame.draw.circle(surface, PLAYER_BODY, (cx, cy), radius)
        pygame.draw.circle(surface, PLAYER_DARK, (cx, cy), radius, 2)

        # Eyes look the way we last moved
        dr, dc = self.facing.offset
        eye_offset = radius * 0.35
        eye_radius = max(1, radius // 4)
        for spread in (-1, 1):
            ex = cx + dc * eye_offset + (spread * eye_offset if dc == 0 else 0)
            ey = cy + dr * eye_offset + (spread * eye_offset if dr == 0 else 0)
            pygame.draw.circle(surface, WHITE, (int(ex), int(ey)), eye_radius)
            pygame.draw.circle(surface, BLACK, (int(ex + dc), int(ey + dr)), max(1, eye_radius // 2))

        # Bobbing antenna
        bob = math.sin(self.animation_frame * 0.2) * radius * 0.3
        tip = (cx + bob, cy - radius * 1.5)
        pygame.draw.line(surface, PLAYER_DARK, (cx, cy - radius), tip, 2)
        pygame.draw.circle(surface, YELLOW, (int(tip[0]), int(tip[1])), max(1, radius // 5))

        self.animation_frame += 1


class Game:
    """Main game class"""

    def __init__(self, difficulty=Difficulty.EASY, mode=GameMode.DEFAULT, wall_color='white',
                 background_color=DEFAULT_BACKGROUND, windowed=False, seed=None):
        if windowed:
            self.screen = pygame.display.set_mode(WINDOW_SIZE)
        else:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        self.screen_width, self.screen_height = self.screen.get_size()
        pygame.display.set_caption("Frantic Maze")

        self.clock = pygame.time.Clock()
        self.state = GameState.TITLE
        self.running = True

        # Settings
        self.difficulty = difficulty
        self.mode = mode
        self.wall_color = wall_color
        self.background_color = background_color
        self.seed_source = random.Random(seed)

        # Maze placement, square and centred
        self.maze_size = min(self.screen_width, self.screen_height) - 2 * MAZE_MARGIN
        self.maze_offset_x = (self.screen_width - self.maze_size) // 2
        self.maze_offset_y = (self.screen_height - self.maze_size) // 2

        # Game state
        self.maze = None
        self.maze_seed = None
        self.cell_colors = {}
        self.player = PlayerSprite()
        self.timer = PlayTimer()
        self.final_time = 0
        self.last_scramble_second = None
        self.keyboard_direction = None

        self.sounds = self._init_sounds()

        # Fonts
        self.title_font = pygame.font.Font(None, 72)
        self.large_font = pygame.font.Font(None, 48)
        self.medium_font = pygame.font.Font(None, 36)
        self.small_font = pygame.font.Font(None, 24)

    def _init_sounds(self):
        """Initialize all game sounds, or None if there is no audio device"""
        if not pygame.mixer.get_init():
            return None
        return {
            'move': SoundGenerator.generate_move_sound(),
            'bump': SoundGenerator.generate_bump_sound(),
            'rotate_walls': SoundGenerator.generate_rotate_walls_sound(),
            'game_over': SoundGenerator.generate_game_over_sound(),
        }

    def _play_sound(self, name):
        if self.sounds:
            self.sounds[name].play()

    def _play_sound_sequence(self, name, delay=120):
        """Play a sequence of sounds with delay"""
        if not self.sounds:
            return
        sounds = self.sounds[name]

        def play():
            for sound in sounds:
                sound.play()
                pygame.time.wait(delay)

        thread = threading.Thread(target=play, daemon=True)
        thread.start()

    @property
    def cell_size(self):
        return self.maze_size / max(self.maze.rows, self.maze.columns)

    # ------------------------------------------------------------------
    # Game flow

    def new_game(self):
        """Start generating a brand new maze"""
        self.maze_seed = self.seed_source.randrange(2 ** 32)
        self._build_maze()

    def restart_game(self):
        """Play the same maze again from the start"""
        if self.maze_seed is None:
            self.new_game()
        else:
            self._build_maze()

    def _build_maze(self):
        self.maze = MazeTopology.for_difficulty(self.difficulty, seed=self.maze_seed)

        # 'mixed' gets one colour per cell for the lifetime of the maze
        palette = random.Random(self.maze_seed)
        self.cell_colors = {cell.position: palette.choice(MIXED_PALETTE) for cell in self.maze.cells()}

        self.player = PlayerSprite()
        self.timer = PlayTimer()
        self.final_time = 0
        self.last_scramble_second = None
        self.keyboard_direction = None
        self.state = GameState.GENERATING

    def _start_playing(self):
        rows, columns = self.maze.rows, self.maze.columns
        print(f"Maze generated: {rows}x{columns}, {self.maze.removed_walls} walls removed")
        self.timer.start()
        self.state = GameState.PLAYING

    def change_difficulty(self, difficulty):
        self.difficulty = difficulty

    def toggle_pause(self):
        if self.state == GameState.PLAYING:
            self.timer.pause()
            self.state = GameState.PAUSED
        elif self.state == GameState.PAUSED:
            self.timer.resume()
            self.state = GameState.PLAYING

    def quit_to_title(self):
        self.timer.stop()
        self.maze = None
        self.state = GameState.TITLE

    def game_over(self):
        self.timer.stop()
        self.final_time = self.timer.seconds
        self._play_sound_sequence('game_over')
        self.state = GameState.GAME_OVER

    # ------------------------------------------------------------------
    # Events and updates

    def handle_events(self):
        """Handle pygame events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key):
        if key == pygame.K_q:
            self.running = False
        elif self.state == GameState.TITLE:
            if key == pygame.K_SPACE:
                self.new_game()
            elif key in DIFFICULTY_KEYS:
                self.change_difficulty(DIFFICULTY_KEYS[key])
            elif key == pygame.K_TAB:
                self.mode = next_in_cycle(GameMode, self.mode)
            elif key == pygame.K_c:
                self.wall_color = next_in_cycle(MAZE_COLORS, self.wall_color)
            elif key == pygame.K_b:
                self.background_color = next_in_cycle(BACKGROUND_COLORS, self.background_color)
        elif key in (pygame.K_ESCAPE, pygame.K_m):
            self.quit_to_title()
        elif key == pygame.K_n:
            self.new_game()
        elif key == pygame.K_r:
            self.restart_game()
        elif key == pygame.K_p:
            self.toggle_pause()
        elif self.state == GameState.PLAYING and key in KEY_DIRECTIONS:
            self.keyboard_direction = KEY_DIRECTIONS[key]

    def update(self):
        """Update game state"""
        if self.state == GameState.GENERATING:
            for _ in range(GENERATION_STEPS_PER_FRAME):
                if self.maze.step_generation():
                    self._start_playing()
                    break
            return

        if self.state != GameState.PLAYING:
            return

        if self.mode == GameMode.FRANTIC:
            self._update_frantic()

        if self.keyboard_direction is not None:
            direction = self.keyboard_direction
            self.keyboard_direction = None

            result = attempt_move(self.maze, direction)
            if result.moved:
                self.player.facing = direction
                self._play_sound('move')
                if result.reached_goal:
                    self.game_over()
            else:
                self._play_sound('bump')

    def _update_frantic(self):
        """Kick off a scramble cycle on every due second, then animate it"""
        seconds = self.timer.seconds
        if frantic_cycle_due(seconds) and seconds != self.last_scramble_second:
            self.last_scramble_second = seconds
            if self.maze.begin_scramble():
                self._play_sound_sequence('rotate_walls', 60)

        if self.maze.scramble_active:
            self.maze.advance_scramble()

    # ------------------------------------------------------------------
    # Drawing

    def draw(self):
        """Draw the game"""
        self.screen.fill(BACKGROUND_COLORS[self.background_color])

        if self.state == GameState.TITLE:
            self._draw_title_screen()
        elif self.state == GameState.GENERATING:
            self._draw_maze(highlight=self.maze.current_cell)
            self._draw_generation_progress()
        elif self.state == GameState.PLAYING:
            self._draw_game()
        elif self.state == GameState.PAUSED:
            self._draw_game()
            self._draw_overlay("Paused", "P to resume, R to restart, M for menu")
        elif self.state == GameState.GAME_OVER:
            self._draw_maze()
            self._draw_overlay("You made it!", f"Time: {self.final_time} seconds",
                               "N for a new maze, R to replay, M for menu")

        pygame.display.flip()

    def _draw_title_screen(self):
        """Draw the title screen"""
        title = self.title_font.render("Frantic Maze", True, CYAN)
        self.screen.blit(title, title.get_rect(center=(self.screen_width // 2, self.screen_height // 4)))

        rows, columns = DIFFICULTY_DIMENSIONS[self.difficulty]
        lines = [
            (f"Difficulty: {self.difficulty.value} ({rows}x{columns})", WHITE),
            (f"Mode: {self.mode.value}", WHITE),
            (GAME_MODE_DESCRIPTIONS[self.mode], GRAY),
            (f"Walls: {self.wall_color}", WHITE),
            (f"Background: {self.background_color}", WHITE),
            ("", WHITE),
            ("1-4 choose difficulty, TAB changes mode, C wall colour, B background", GRAY),
            ("Arrow keys move, P pauses, R restarts, N new maze, M menu", GRAY),
            ("Press SPACE to start, Q to quit", YELLOW),
        ]

        y = self.screen_height // 2 - 80
        for text, color in lines:
            label = self.medium_font.render(text, True, color)
            self.screen.blit(label, label.get_rect(center=(self.screen_width // 2, y)))
            y += 40

    def _wall_color_for(self, cell):
        if self.wall_color == 'mixed':
            return self.cell_colors[cell.position]
        if self.wall_color == 'mixed-animated':
            return random.choice(MIXED_PALETTE)
        return MAZE_COLORS[self.wall_color]

    def _cell_origin(self, cell):
        size = self.cell_size
        return self.maze_offset_x + cell.column * size, self.maze_offset_y + cell.row * size

    def _draw_maze(self, highlight=None):
        size = self.cell_size

        for cell in self.maze.cells():
            x, y = self._cell_origin(cell)

            if cell.is_goal:
                pygame.draw.rect(self.screen, GREEN, (x + 5, y + 5, size - 10, size - 10))
            if highlight is not None and cell == highlight:
                pygame.draw.rect(self.screen, ORANGE, (x + 2, y + 2, size - 4, size - 4))

            color = self._wall_color_for(cell)
            for side, wall in cell.walls.items():
                sweeping = cell.is_rotating and cell.wall_to_rotate == side
                if wall.is_shown or sweeping:
                    start, end = wall_segment(x, y, size, side, wall.theta)
                    pygame.draw.line(self.screen, color, start, end, WALL_WIDTH)

    def _draw_player(self):
        x, y = self._cell_origin(self.maze.current_cell)
        half = self.cell_size / 2
        self.player.draw(self.screen, int(x + half), int(y + half), self.cell_size)

    def _draw_game(self):
        """Draw the main game"""
        if self.mode != GameMode.MEMORY or memory_mode_visible(self.timer.seconds):
            self._draw_maze()
            self._draw_player()
        self._draw_hud()

    def _draw_hud(self):
        """Draw the heads-up display"""
        timer_text = self.large_font.render(f"Time: {self.timer.seconds}", True, WHITE)
        self.screen.blit(timer_text, timer_text.get_rect(midtop=(self.screen_width // 2, 20)))

        info = self.small_font.render(f"{self.difficulty.value} / {self.mode.value}", True, GRAY)
        self.screen.blit(info, (20, 20))

        if self.maze.scramble_active:
            warning = self.medium_font.render("WALLS ROTATING", True, ORANGE)
            self.screen.blit(warning, warning.get_rect(midtop=(self.screen_width // 2, 70)))

    def _draw_generation_progress(self):
        bar_width = 400
        bar_height = 20
        bar_x = (self.screen_width - bar_width) // 2
        bar_y = 40
        pygame.draw.rect(self.screen, GRAY, (bar_x, bar_y, bar_width, bar_height), 2)
        fill_width = int(bar_width * self.maze.generation_progress())
        pygame.draw.rect(self.screen, CYAN, (bar_x, bar_y, fill_width, bar_height))

    def _draw_overlay(self, title, *lines):
        overlay = pygame.Surface((self.screen_width, self.screen_height))
        overlay.set_alpha(180)
        overlay.fill(BLACK)
        self.screen.blit(overlay, (0, 0))

        heading = self.title_font.render(title, True, GREEN)
        self.screen.blit(heading, heading.get_rect(center=(self.screen_width // 2, self.screen_height // 3)))

        y = self.screen_height // 2
        for line in lines:
            label = self.medium_font.render(line, True, WHITE)
            self.screen.blit(label, label.get_rect(center=(self.screen_width // 2, y)))
            y += 50

    def run(self):
        """Main game loop"""
        try:
            while self.running:
                self.handle_events()
                self.update()
                self.draw()
                self.clock.tick(FPS)
        finally:
            pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Frantic Maze - a maze whose walls keep moving')
    parser.add_argument('--difficulty', choices=[d.value for d in Difficulty], default=Difficulty.EASY.value,
                        help='Maze size tier')
    parser.add_argument('--mode', choices=[m.value for m in GameMode], default=GameMode.DEFAULT.value,
                        help='Game mode')
    parser.add_argument('--wall-color', choices=list(MAZE_COLORS), default='white',
                        help='Colour to draw the walls with')
    parser.add_argument('--background-color', choices=list(BACKGROUND_COLORS), default=DEFAULT_BACKGROUND,
                        help='Colour to draw the maze on')
    parser.add_argument('--windowed', action='store_true', help='Run in a window instead of full screen')
    parser.add_argument('--seed', type=int, help='Seed for reproducible mazes')
    return parser.parse_args(argv)


def main(argv=None):
    """Entry point"""
    args = parse_args(argv)

    pygame.init()
    try:
        pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=512)
    except pygame.error as e:
        print(f"Sound disabled: {e}")

    game = Game(
        difficulty=Difficulty(args.difficulty),
        mode=GameMode(args.mode),
        wall_color=args.wall_color,
        background_color=args.background_color,
        windowed=args.windowed,
        seed=args.seed,
    )
    game.run()


if __name__ == "__main__":
    main()

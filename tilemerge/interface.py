import math

import pygame

from .board import BoardSnapshot
from .controller import GameController, GameStatus
from .direction import ShiftDirection
from .renderers import GameRenderer

# --- Constants for Interface ---
TILE_SIZE = 100
MARGIN = 10
SCORE_HEIGHT = 80
BG_COLOR = (250, 248, 239)
GRID_COLOR = (187, 173, 160)
EMPTY_CELL_COLOR = (205, 193, 180)
TEXT_COLOR_LIGHT = (249, 246, 242)
TEXT_COLOR_DARK = (119, 110, 101)
TILE_COLORS = {
    0: EMPTY_CELL_COLOR, 2: (238, 228, 218), 4: (237, 224, 200),
    8: (242, 177, 121), 16: (245, 149, 99), 32: (246, 124, 95),
    64: (246, 94, 59), 128: (237, 207, 114), 256: (237, 204, 97),
    512: (237, 200, 80), 1024: (237, 197, 63), 2048: (237, 194, 46),
    4096: (60, 58, 50),
}
AUTO_PLAY_INTERVAL_MS = 120
FPS = 60

KEY_DIRECTIONS = {
    pygame.K_LEFT: ShiftDirection.LEFT, pygame.K_a: ShiftDirection.LEFT,
    pygame.K_RIGHT: ShiftDirection.RIGHT, pygame.K_d: ShiftDirection.RIGHT,
    pygame.K_UP: ShiftDirection.UP, pygame.K_w: ShiftDirection.UP,
    pygame.K_DOWN: ShiftDirection.DOWN, pygame.K_s: ShiftDirection.DOWN,
}


def tile_color(value):
    if not value:
        return EMPTY_CELL_COLOR
    color_key = 2 ** min(int(math.log2(value)), 12)
    return TILE_COLORS[color_key]


def text_color(value):
    return TEXT_COLOR_DARK if value <= 4 else TEXT_COLOR_LIGHT


def tile_font_size(value):
    digits = len(str(value))
    if digits <= 2: return 55
    if digits == 3: return 45
    if digits == 4: return 35
    if digits == 5: return 30
    return 25


class PygameInterface(GameRenderer):
    """
    Window front end. Registers itself as a renderer of `controller` and
    keeps the latest snapshot; the main loop redraws it every frame.

    Keys: arrows / WASD move, H shows a hint, P plays the hint,
    SPACE toggles auto-play, R restarts, ESC quits.
    """

    def __init__(self, controller: GameController):
        self.controller = controller
        self.board_size = controller.board.size

        self.grid_width = self.board_size * TILE_SIZE + (self.board_size + 1) * MARGIN
        self.grid_height = self.grid_width
        self.window_width = self.grid_width
        self.window_height = self.grid_height + SCORE_HEIGHT

        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("tilemerge")
        self.clock = pygame.time.Clock()

        self.font_hud = pygame.font.SysFont("Arial", 28, bold=True)
        self.font_large = pygame.font.SysFont("Arial", 60, bold=True)

        self._snapshot = controller.board.snapshot()
        self._status_message = None
        self._hint = None
        self._auto_play = False
        self._last_auto_move = 0

        controller.add_renderer(self)

    # --- Renderer callbacks ---
    def render_board(self, snapshot: BoardSnapshot) -> None:
        self._snapshot = snapshot
        self._hint = None

    def render_message(self, status) -> None:
        self._status_message = "You Win!" if status is GameStatus.WON else "Game Over!"
        self._auto_play = False

    # --- Drawing ---
    def _cell_rect(self, r, c):
        return pygame.Rect(MARGIN + c * (TILE_SIZE + MARGIN),
                           SCORE_HEIGHT + MARGIN + r * (TILE_SIZE + MARGIN),
                           TILE_SIZE, TILE_SIZE)

    def _draw_board(self):
        self.screen.fill(BG_COLOR)
        pygame.draw.rect(self.screen, GRID_COLOR, (0, SCORE_HEIGHT, self.window_width, self.grid_height))

        for r, row in enumerate(self._snapshot.cells):
            for c, value in enumerate(row):
                rect = self._cell_rect(r, c)
                pygame.draw.rect(self.screen, tile_color(value), rect, border_radius=5)
                if value:
                    font = pygame.font.SysFont("Arial", tile_font_size(value), bold=True)
                    text = font.render(str(value), True, text_color(value))
                    self.screen.blit(text, text.get_rect(center=rect.center))

        hud = f"Moves: {self.controller.move_count}"
        if self._hint is not None:
            hud += f"   Hint: {self._hint.value}"
        if self._auto_play:
            hud += "   [auto]"
        hud_text = self.font_hud.render(hud, True, TEXT_COLOR_DARK)
        self.screen.blit(hud_text, hud_text.get_rect(center=(self.window_width // 2, SCORE_HEIGHT // 2)))

    def _draw_message(self):
        overlay = pygame.Surface((self.window_width, self.window_height), pygame.SRCALPHA)
        overlay.fill((238, 228, 218, 180))
        self.screen.blit(overlay, (0, 0))
        msg = self.font_large.render(self._status_message, True, TEXT_COLOR_DARK)
        self.screen.blit(msg, msg.get_rect(center=(self.window_width // 2, self.window_height // 2)))
        restart_msg = pygame.font.SysFont("Arial", 30, bold=True).render("Press R to Restart", True, TEXT_COLOR_DARK)
        self.screen.blit(restart_msg, restart_msg.get_rect(center=(self.window_width // 2, self.window_height - 50)))

    # --- Input ---
    def _handle_key(self, key):
        if key == pygame.K_r:
            self._status_message = None
            self.controller.restart()
        elif key == pygame.K_h:
            self._hint = self.controller.recommend_move()
        elif key == pygame.K_p:
            self.controller.play_recommended_move()
        elif key == pygame.K_SPACE:
            self._auto_play = not self._auto_play
        elif key in KEY_DIRECTIONS:
            self.controller.move(KEY_DIRECTIONS[key])

    # --- Main Loop ---
    def run(self):
        running = True
        while running:
            self.clock.tick(FPS)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        self._handle_key(event.key)

            now = pygame.time.get_ticks()
            if self._auto_play and now - self._last_auto_move > AUTO_PLAY_INTERVAL_MS:
                if self.controller.play_recommended_move() is None:
                    self._auto_play = False
                self._last_auto_move = now

            self._draw_board()
            if self._status_message:
                self._draw_message()
            pygame.display.flip()

        self.controller.remove_renderer(self)
        pygame.quit()

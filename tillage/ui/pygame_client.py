"""Pygame 2D client for the Tillage simulation.

Draws the tile map, the player and a stats panel, and feeds keyboard
movement into the simulation.  In real-time mode the simulation clock
follows the frame clock (paused time does not count); in turn mode
every committed move is one turn.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pygame

from tillage.player.player import Direction
from tillage.simulation.engine import Simulation
from tillage.world.tiles import Tile

if TYPE_CHECKING:
    from tillage.simulation.config import SimulationConfig

# Colour palette
_BG = (20, 16, 12)
_PANEL_TEXT = (200, 200, 200)
_PLAYER = (240, 230, 200)
_HEALTH = (220, 40, 40)
_HEALTH_BG = (255, 255, 255)

_TILE_COLOURS: dict[Tile, tuple[int, int, int]] = {
    Tile.EMPTY: (0, 0, 0),
    Tile.GROUND: (110, 90, 60),
    Tile.FARM: (96, 64, 40),
    Tile.PLANT: (70, 140, 50),
    Tile.FLOOR: (120, 120, 120),
    Tile.CARROT: (240, 140, 30),
    Tile.ROCK: (90, 90, 100),
    Tile.ANGER_REAL: (230, 30, 30),
    Tile.ANGER_WARNING: (240, 200, 40),
    Tile.TOPRIGHT_WALL: (60, 60, 70),
    Tile.BOTTOMLEFT_WALL: (60, 60, 70),
    Tile.BOTTOMRIGHT_WALL: (60, 60, 70),
    Tile.WORKING_VENT: (80, 160, 200),
    Tile.BROKEN_VENT: (100, 70, 70),
    Tile.MOLD: (150, 60, 170),
}

_MOVE_KEYS: dict[int, Direction] = {
    pygame.K_w: Direction.UP,
    pygame.K_UP: Direction.UP,
    pygame.K_a: Direction.LEFT,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_s: Direction.DOWN,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_d: Direction.RIGHT,
    pygame.K_RIGHT: Direction.RIGHT,
}


class PygameRenderer:
    """Renders a Simulation into a Pygame window.

    Attributes:
        sim: The simulation being played.
        scale: Screen pixels per world pixel.
        screen: The Pygame display surface.
    """

    _PANEL_WIDTH: ClassVar[int] = 200

    def __init__(self, config: SimulationConfig, scale: int = 2) -> None:
        """Initialise the window and a fresh simulation.

        Args:
            config: Configuration for every simulation this client starts.
            scale: Screen pixels per world pixel.
        """
        self.config = config
        self.scale = scale
        self.sim = Simulation.with_field(config)

        cell = config.tile_size * scale
        self._cell = cell
        self._win_w = self.sim.grid.width * cell + self._PANEL_WIDTH
        self._win_h = self.sim.grid.height * cell

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Tillage")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = False

    def run(self, fps: int = 60) -> None:
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt_ms = self.clock.tick(fps)
            self._handle_events()
            if not self.paused and not self.sim.terminal and not self.config.turn_based:
                self._walk(dt_ms / 1000.0)
                self.sim.advance(self.sim.now + dt_ms)
            self._draw()

        pygame.quit()

    def restart(self) -> None:
        """Throw the current game away and start a new one."""
        self.sim = Simulation.with_field(self.config)
        self.paused = False

    def _walk(self, dt: float) -> None:
        """Move the player continuously from the held movement keys."""
        pressed = pygame.key.get_pressed()
        dx = dy = 0
        for key, direction in _MOVE_KEYS.items():
            if pressed[key]:
                dx += direction.dx
                dy += direction.dy
        dx = max(-1, min(1, dx))
        dy = max(-1, min(1, dy))
        self.sim.player.walk(
            dx,
            dy,
            dt,
            self.sim.grid,
            self.config.tile_size,
            self.config.player_speed,
        )

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key == pygame.K_r and self.sim.terminal:
                    self.restart()
                elif (
                    self.config.turn_based
                    and not self.paused
                    and not self.sim.terminal
                    and event.key in _MOVE_KEYS
                ):
                    self.sim.step_player(_MOVE_KEYS[event.key])

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_tiles()
        self._draw_player()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_tiles(self) -> None:
        """Fill each cell with its tile colour."""
        cs = self._cell
        for x, y, tile in self.sim.grid.cells():
            colour = _TILE_COLOURS.get(tile)
            if colour is not None:
                pygame.draw.rect(self.screen, colour, (x * cs, y * cs, cs, cs))

    def _draw_player(self) -> None:
        """Draw the player as a square the size of its body."""
        size = int(self._cell * 0.95)
        px = int(self.sim.player.x * self.scale) - size // 2
        py = int(self.sim.player.y * self.scale) - size // 2
        pygame.draw.rect(self.screen, _PLAYER, (px, py, size, size))

    def _draw_info_panel(self) -> None:
        """Draw health bar and stats on the right side of the window."""
        player = self.sim.player
        panel_x = self.sim.grid.width * self._cell + 10
        y = 10

        bar_w = self._PANEL_WIDTH - 20
        pygame.draw.rect(self.screen, _HEALTH_BG, (panel_x, y, bar_w, 16))
        pygame.draw.rect(
            self.screen,
            _HEALTH,
            (panel_x, y, int(bar_w * player.health.fraction), 16),
        )
        y += 26

        lines = [
            f"Health: {player.health.level:.0f}",
            f"Food: {player.food.level:.0f}",
            f"{'Turn' if self.config.turn_based else 'Time'}: {self.sim.now:.0f}",
            f"Pending: {len(self.sim.scheduler)}",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
        ]
        if self.sim.terminal:
            lines += ["", "You lost!", "R: play again"]

        lines += [
            "",
            "--- Controls ---",
            "WASD: move",
            "SPACE: pause",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _PANEL_TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

import logging

import pygame

from maze_stepper.core.controller import MazeController, MazeSnapshot
from maze_stepper.core.errors import MazeError
from maze_stepper.core.grid import Grid
from maze_stepper.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)


class Renderer:
    COLOR_BG = (230, 230, 230)
    COLOR_WALL = (0, 0, 0)
    COLOR_VISITED = (60, 100, 160)  # Blue tint
    COLOR_CURRENT = (0, 220, 220)
    COLOR_CLOSED = (120, 170, 210)
    COLOR_FRONTIER = (250, 160, 80)
    COLOR_SOLUTION = (255, 215, 0)  # Gold
    COLOR_START = (0, 200, 0)
    COLOR_END = (220, 0, 0)

    def __init__(self, controller: MazeController, width=1200, height=600, delay=0.001, record=False,
                 output_file=None):
        self.controller = controller
        self.screen_width = width
        self.screen_height = height
        # Seconds between engine steps; several steps run per frame when shorter than a frame
        self.delay = delay
        self.timer = 0.0

        self.cell_size = 20.0
        self.offset_x = 0.0
        self.offset_y = 0.0

        self.recorder = VideoRecorder(active=record, output_file=output_file)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        grid = self.controller.grid
        padding = 20
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = max(1.0, min(available_w / grid.width, available_h / grid.height))

        self.offset_x = (self.screen_width - grid.width * self.cell_size) / 2
        self.offset_y = (self.screen_height - grid.height * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        grid = self.controller.grid
        pygame.display.set_caption(f"Maze Stepper - {grid.width}x{grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key):
        try:
            if key == pygame.K_ESCAPE:
                self.running = False
            elif key == pygame.K_SPACE:
                self.controller.toggle_pause()
            elif key == pygame.K_n:
                self.controller.single_step()
            elif key == pygame.K_s:
                self.controller.start_solving()
            elif key == pygame.K_r:
                self.controller.reset()
                self.timer = 0.0
        except MazeError as e:
            logger.warning(f"Command rejected: {e}")

    def update(self, dt: float):
        if self.controller.is_paused:
            self.timer = 0.0
            return
        if self.delay <= 0:
            # No delay: one step per frame
            self.controller.step()
            return
        self.timer += dt
        steps = int(self.timer / self.delay)
        if steps:
            self.timer -= steps * self.delay
            self.controller.advance(steps)

    def draw_cell(self, pos, color):
        size = int(self.cell_size) + 1
        px = int(pos[1] * self.cell_size + self.offset_x)
        py = int(pos[0] * self.cell_size + self.offset_y)
        pygame.draw.rect(self.surface, color, (px, py, size, size))

    def draw_grid(self, snap: MazeSnapshot):
        self.surface.fill(self.COLOR_BG)

        # Backgrounds, later layers win
        for pos in snap.visited:
            self.draw_cell(pos, self.COLOR_VISITED)
        for pos in snap.closed:
            self.draw_cell(pos, self.COLOR_CLOSED)
        for pos in snap.frontier:
            self.draw_cell(pos, self.COLOR_FRONTIER)
        for pos in snap.path:
            self.draw_cell(pos, self.COLOR_SOLUTION)
        if snap.current is not None:
            self.draw_cell(snap.current, self.COLOR_CURRENT)
        self.draw_cell(snap.start, self.COLOR_START)
        self.draw_cell(snap.end, self.COLOR_END)

        # Walls
        thickness = max(1, int(self.cell_size / 10))
        size = self.cell_size
        for row in range(snap.height):
            for col in range(snap.width):
                mask = snap.walls[row * snap.width + col]
                px = col * size + self.offset_x
                py = row * size + self.offset_y
                if mask & Grid.SOUTH:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), thickness)
                if mask & Grid.EAST:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), thickness)
                if row == 0 and (mask & Grid.NORTH):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), thickness)
                if col == 0 and (mask & Grid.WEST):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), thickness)

    def draw_hud(self, snap: MazeSnapshot):
        info = [
            f"FPS: {int(self.clock.get_fps())}",
            f"Size: {snap.width}x{snap.height}",
            f"Phase: {snap.phase.name}",
            f"Path: {len(snap.path)}" if snap.path else "",
            "REC" if self.recorder.active else "",
        ]
        for i, text in enumerate(info):
            if text:
                lbl = self.font.render(text, True, (20, 20, 20))
                self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()
            dt = self.clock.tick(60) / 1000.0
            self.update(dt)

            snap = self.controller.snapshot()
            self.draw_grid(snap)
            self.draw_hud(snap)
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

        self.recorder.stop()
        pygame.quit()

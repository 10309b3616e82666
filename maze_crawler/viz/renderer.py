import pygame
from maze_crawler.core.grid import Grid

class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_FLOOR = (225, 225, 215)
    COLOR_WALL = (45, 45, 55)
    COLOR_BORDER = (110, 110, 130)
    COLOR_START = (40, 180, 80)   # Green
    COLOR_END = (220, 30, 30)     # Red
    COLOR_SOLUTION = (255, 215, 0)# Gold

    CELL_COLORS = {
        Grid.WALL: COLOR_WALL,
        Grid.FLOOR: COLOR_FLOOR,
        Grid.BORDER: COLOR_BORDER,
        Grid.START: COLOR_START,
        Grid.END: COLOR_END,
    }

    STEPS_PER_FRAME = 20
    FPS = 60

    def __init__(self, grid: Grid, generator=None, solution=None, width=1280, height=720, record=False):
        self.grid = grid
        self.generator = generator
        self.solution = solution or []
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        from maze_crawler.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.gen_iter = None
        self.gen_finished = generator is None
        self.status = "Done" if generator is None else "Running"

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / self.grid.width, available_h / self.grid.height)

        self.offset_x = (self.screen_width - self.grid.width * self.cell_size) / 2
        self.offset_y = (self.screen_height - self.grid.height * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Crawler - {self.grid.width}x{self.grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def world_to_screen(self, wx, wy):
        return wx * self.cell_size + self.offset_x, wy * self.cell_size + self.offset_y

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(100.0, self.cell_size))

                # Keep mouse at same world coord
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        size = int(self.cell_size) + 1

        for y in range(self.grid.height):
            for x in range(self.grid.width):
                cell = self.grid.cells[y * self.grid.width + x]
                sx, sy = self.world_to_screen(x, y)
                color = self.CELL_COLORS.get(cell, self.COLOR_BG)
                pygame.draw.rect(self.surface, color, (int(sx), int(sy), size, size))

        for (px, py) in self.solution:
            if self.grid.cells[py * self.grid.width + px] == Grid.FLOOR:
                sx, sy = self.world_to_screen(px, py)
                pygame.draw.rect(self.surface, self.COLOR_SOLUTION, (int(sx), int(sy), size, size))

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.width}x{self.grid.height}",
            f"Zoom: {self.cell_size:.2f}",
            f"Status: {self.status}",
            "REC" if self.recorder.active else ""
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def step_generator(self, steps: int):
        try:
            for _ in range(steps):
                self.status = next(self.gen_iter)
        except StopIteration:
            self.gen_finished = True
            self.status = "Done"

    def finish_generator(self):
        """Runs whatever the window did not get to show."""
        if self.generator and not self.gen_finished:
            if self.gen_iter is None:
                self.gen_iter = self.generator.run()
            for _ in self.gen_iter:
                pass
            self.gen_finished = True
            self.status = "Done"

    def run_loop(self):
        if self.generator and self.gen_iter is None:
            self.gen_iter = self.generator.run()

        while self.running:
            self.handle_input()

            if not self.gen_finished:
                self.step_generator(self.STEPS_PER_FRAME)

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(self.FPS)

        self.recorder.stop()
        pygame.quit()

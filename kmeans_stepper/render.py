import pygame
from pygame.locals import QUIT, KEYDOWN, MOUSEBUTTONDOWN, K_ESCAPE, K_SPACE, K_RETURN, K_n, K_r
from loguru import logger

from kmeans_stepper.data import UNASSIGNED
from kmeans_stepper.utils import hex_to_rgb, scale

ADVANCE = "advance"
RESET = "reset"
QUIT_ACTION = "quit"

BUTTON_WIDTH = 90
BUTTON_MARGIN = 8


class View:
    """
    pygame window showing the current session. The upper width x height area
    is the model canvas, the strip below it holds the Next / Reset buttons and
    the iteration counter.
    """

    def __init__(self, cfg):
        render = cfg.render
        self.low = cfg.data.low
        self.high = cfg.data.high
        self.width = render.width
        self.height = render.height
        self.toolbar_height = render.toolbar_height
        self.fps = render.fps
        self.point_radius = render.point_radius
        self.centroid_radius = render.centroid_radius
        self.centroid_outline_width = render.centroid_outline_width
        self.background = pygame.Color(*hex_to_rgb(render.background))
        self.toolbar_background = pygame.Color(*hex_to_rgb(render.toolbar_background))
        self.text_color = pygame.Color(*hex_to_rgb(render.text_color))
        self.point_outline = pygame.Color(*hex_to_rgb(render.point_outline))
        self.centroid_outline = pygame.Color(*hex_to_rgb(render.centroid_outline))
        self.unassigned_color = pygame.Color(*hex_to_rgb(render.unassigned_color))
        self.palette = [pygame.Color(*hex_to_rgb(c)) for c in render.palette]

        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height + self.toolbar_height))
        pygame.display.set_caption(render.window_name)
        self.font = pygame.font.Font(None, 25)
        self.clock = pygame.time.Clock()

        button_height = self.toolbar_height - 2 * BUTTON_MARGIN
        top = self.height + BUTTON_MARGIN
        self.next_button = pygame.Rect(BUTTON_MARGIN, top, BUTTON_WIDTH, button_height)
        self.reset_button = pygame.Rect(2 * BUTTON_MARGIN + BUTTON_WIDTH, top, BUTTON_WIDTH, button_height)
        logger.debug(f"Opened {self.width}x{self.height} view")

    def to_screen(self, x, y):
        """Model coordinates to pixels; model +high is the top of the canvas."""
        screen_x = scale(x, self.low, self.high, 0, self.width)
        screen_y = scale(y, self.low, self.high, self.height, 0)
        return int(round(screen_x)), int(round(screen_y))

    def color_for(self, label):
        if label == UNASSIGNED:
            return self.unassigned_color
        return self.palette[label]

    def draw(self, state):
        self.screen.fill(self.background)
        # points
        for (x, y), label in zip(state.points, state.labels):
            center = self.to_screen(x, y)
            pygame.draw.circle(self.screen, self.color_for(int(label)), center, self.point_radius)
            pygame.draw.circle(self.screen, self.point_outline, center, self.point_radius, 1)
        # centroids
        for index, (x, y) in enumerate(state.centroids):
            center = self.to_screen(x, y)
            pygame.draw.circle(self.screen, self.palette[index], center, self.centroid_radius)
            pygame.draw.circle(self.screen, self.centroid_outline, center, self.centroid_radius,
                               self.centroid_outline_width)
        self._draw_toolbar(state)
        pygame.display.flip()
        self.clock.tick(self.fps)

    def _draw_toolbar(self, state):
        pygame.draw.rect(self.screen, self.toolbar_background,
                         (0, self.height, self.width, self.toolbar_height))
        for rect, caption in ((self.next_button, "Next"), (self.reset_button, "Reset")):
            pygame.draw.rect(self.screen, self.background, rect)
            pygame.draw.rect(self.screen, self.text_color, rect, 1)
            text = self.font.render(caption, True, self.text_color)
            self.screen.blit(text, text.get_rect(center=rect.center))

        status = f"Iteration {state.iteration}"
        if state.converged:
            status += " (converged)"
        text = self.font.render(status, True, self.text_color)
        self.screen.blit(text, (self.reset_button.right + 2 * BUTTON_MARGIN,
                                self.height + (self.toolbar_height - text.get_height()) // 2))

    def poll_actions(self):
        """Translates pending pygame events into ADVANCE / RESET / QUIT_ACTION."""
        actions = []
        for event in pygame.event.get():
            if event.type == QUIT:
                actions.append(QUIT_ACTION)
            elif event.type == KEYDOWN:
                if event.key == K_ESCAPE:
                    actions.append(QUIT_ACTION)
                elif event.key in (K_SPACE, K_RETURN, K_n):
                    actions.append(ADVANCE)
                elif event.key == K_r:
                    actions.append(RESET)
            elif event.type == MOUSEBUTTONDOWN and event.button == 1:
                if self.next_button.collidepoint(event.pos):
                    actions.append(ADVANCE)
                elif self.reset_button.collidepoint(event.pos):
                    actions.append(RESET)
        return actions

    def wait(self):
        self.clock.tick(self.fps)

    @staticmethod
    def close():
        pygame.quit()


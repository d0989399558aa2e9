# preview.py
import numpy as np
import pygame

from pathtracer.renderer.tone_mapping import to_8bit


def image_to_surface(image: np.ndarray) -> pygame.Surface:
    """
    Convert a (height, width, 3) image to a pygame Surface. Float images are
    quantized first; pygame indexes pixels as (x, y), hence the transpose.
    """
    if image.dtype != np.uint8:
        image = to_8bit(image)
    return pygame.surfarray.make_surface(np.ascontiguousarray(image.swapaxes(0, 1)))


def show_image(image: np.ndarray, title: str = "Path Tracer"):
    """
    Open a window showing the image and block until it is closed or Esc
    is pressed.
    """
    pygame.init()
    try:
        surface = image_to_surface(image)
        screen = pygame.display.set_mode(surface.get_size())
        pygame.display.set_caption(title)
        screen.blit(surface, (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()

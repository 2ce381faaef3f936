# ui/typing_screen.py
import logging

import cv2
import pygame

from config import WIN_W, WIN_H, FPS, SHOW_PREVIEW, NO_SIGN_LABEL
from gesture.session import SignTypingSession

logger = logging.getLogger(__name__)


class TypingScreen:
    """pygame overlay: live label, typed text, camera info and errors."""

    def __init__(self):
        self.label = NO_SIGN_LABEL
        self.text = ""
        self.error = ""

    # PresentationSink
    def update_label(self, label: str):
        self.label = label
        self.error = ""

    def update_text(self, text: str):
        self.text = text

    def show_error(self, message: str):
        self.error = message
        self.label = NO_SIGN_LABEL


def frame_to_surface(img, size):
    rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    surf = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))
    return pygame.transform.smoothscale(surf, size)


def draw_bar(screen, font, text, y, color, h=40):
    bar = pygame.Surface((WIN_W, h), pygame.SRCALPHA)
    bar.fill((0, 0, 0, 128))
    screen.blit(bar, (0, y))
    screen.blit(font.render(text, True, color), (16, y + (h - font.get_height()) // 2))


def run_app(session: SignTypingSession, screen_sink: TypingScreen, show_preview: bool = SHOW_PREVIEW):
    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("Sign Typer - MediaPipe Hands")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("Consolas", 18)
    big = pygame.font.SysFont("Consolas", 30)

    try:
        session.start()
        logger.info("session started: %s", session.cam_info)

        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        return
                    if event.key in (pygame.K_c, pygame.K_BACKSPACE):
                        session.clear()
                    if event.key == pygame.K_TAB:
                        session.toggle_camera_selector()

            session.poll()

            # Render
            screen.fill((12, 12, 14))
            img = session.preview() if show_preview else None
            if img is not None:
                screen.blit(frame_to_surface(img, (WIN_W, WIN_H)), (0, 0))

            hud = font.render(f"{session.cam_info}", True, (150, 150, 150))
            keys = font.render("TAB switch camera | C clear | ESC quit", True, (150, 150, 150))
            screen.blit(hud, (8, 6))
            screen.blit(keys, (8, 28))

            if screen_sink.error:
                draw_bar(screen, font, screen_sink.error, 60, (255, 160, 160))

            draw_bar(screen, big, screen_sink.label, WIN_H - 120, (255, 255, 255), h=48)
            draw_bar(screen, big, screen_sink.text or " ", WIN_H - 64, (255, 255, 255), h=56)

            pygame.display.flip()
            clock.tick(FPS)
    finally:
        session.close()
        pygame.quit()

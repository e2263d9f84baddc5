"""Command-line entry point and the interactive window loop."""

from __future__ import annotations

import sys
from typing import Sequence

import pygame

from .errors import CubError
from .game import Game, Key, load_textures
from .raycast import SCREEN_HEIGHT, SCREEN_WIDTH, Frame
from .scene import load_scene

WINDOW_TITLE = "CUB_3D"
EXIT_MESSAGE = "EXIT CUB3D"
EXIT_STATUS = 1
FRAME_RATE = 60


def check_arguments(args: Sequence[str]) -> str:
    """Return the scene path, requiring exactly one argument."""
    args = list(args)
    if len(args) != 1:
        raise CubError("Invalid argc count")
    return args[0]


def _key_map() -> dict[int, Key]:
    return {
        pygame.K_ESCAPE: Key.ESC,
        pygame.K_w: Key.W,
        pygame.K_a: Key.A,
        pygame.K_s: Key.S,
        pygame.K_d: Key.D,
        pygame.K_UP: Key.UP,
        pygame.K_DOWN: Key.DOWN,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_LSHIFT: Key.SHIFT,
        pygame.K_RSHIFT: Key.SHIFT,
    }


def _to_surface(frame: Frame) -> pygame.Surface:
    data = b"".join(
        (color & 0xFFFFFF).to_bytes(3, "big") for row in frame for color in row
    )
    return pygame.image.frombuffer(data, (SCREEN_WIDTH, SCREEN_HEIGHT), "RGB")


def run(game: Game) -> int:
    """Open the window and play until the player quits; return the exit status."""
    keys = _key_map()
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN and event.key in keys:
                    game.press(keys[event.key])
                elif event.type == pygame.KEYUP and event.key in keys:
                    game.release(keys[event.key])
            if not game.running:
                break
            game.update()
            screen.blit(_to_surface(game.render()), (0, 0))
            pygame.display.flip()
            clock.tick(FRAME_RATE)
    finally:
        pygame.quit()
    print(EXIT_MESSAGE)
    return EXIT_STATUS


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and play it."""
    args = sys.argv[1:] if argv is None else argv
    try:
        path = check_arguments(args)
        scene = load_scene(path)
        game = Game.from_scene(scene, load_textures(scene.texture_paths))
    except CubError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return run(game)


if __name__ == "__main__":
    sys.exit(main())
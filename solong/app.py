"""The playable window: textures, drawing, music and the main loop."""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

import pygame

from solong.game import GameState, Outcome
from solong.gamemap import COLLECTIBLE, EXIT, WALL, MapError, parse_map
from solong.printfmt import print_formatted
from solong.xpm import TRANSPARENT, XpmError, XpmImage, parse_xpm_file

__all__ = ["Textures", "App", "load_textures", "main"]

WIDTH = 1200
HEIGHT = 1000
TILE_SIZE = 50
TITLE = "So Long"
TEXTURE_DIRECTORY = "textures_pokemon"
MUSIC_PATH = "mp3/Pokemon_battle.mp3"

_FRAME_DELAY_MS = 50
_GAME_OVER_DELAY_MS = 2000

_TEXTURE_FILES = {
    "wall": "wall.xpm",
    "floor": "dalle.xpm",
    "player": "player.xpm",
    "item": "item.xpm",
    "exit": "exit.xpm",
    "enemy": "enemy.xpm",
}

_OVERLAYS = {WALL: "wall", COLLECTIBLE: "item", EXIT: "exit"}

# The game speaks in the key codes of its original keyboard layout.
_KEYMAP = {
    pygame.K_ESCAPE: 53,
    pygame.K_w: 13,
    pygame.K_UP: 126,
    pygame.K_s: 1,
    pygame.K_DOWN: 125,
    pygame.K_a: 0,
    pygame.K_LEFT: 123,
    pygame.K_d: 2,
    pygame.K_RIGHT: 124,
}

DrawOp = Union[tuple[str, str, int, int], tuple[str, str, int, int, int]]


@dataclass(frozen=True)
class Textures:
    """The six tile images the game draws."""

    wall: XpmImage
    floor: XpmImage
    player: XpmImage
    item: XpmImage
    exit: XpmImage
    enemy: XpmImage

    def _named(self) -> Iterator[tuple[str, XpmImage]]:
        for field in fields(self):
            yield field.name, getattr(self, field.name)


def load_textures(directory: Union[str, Path] = TEXTURE_DIRECTORY) -> Textures:
    """Load every tile image from directory; raises XpmError on failure."""
    base = Path(directory)
    images = {name: parse_xpm_file(base / filename) for name, filename in _TEXTURE_FILES.items()}
    return Textures(**images)


def _to_surface(image: XpmImage) -> pygame.Surface:
    data = bytearray()
    for pixel in image.pixels:
        if pixel == TRANSPARENT:
            data += b"\x00\x00\x00\x00"
        else:
            data += bytes(((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF, 0xFF))
    surface = pygame.image.frombuffer(bytes(data), (image.width, image.height), "RGBA")
    return surface.copy()


def _rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


class App:
    """A game window bound to one game state and one set of textures."""

    def __init__(
        self,
        state: GameState,
        textures: Textures,
        music_path: Union[str, Path, None] = MUSIC_PATH,
    ) -> None:
        self.state = state
        self.textures = textures
        self.music_path = music_path
        self.closed = False
        self._screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None
        self._surfaces: dict[str, pygame.Surface] = {}
        self._music_playing = False

    def _frame(self) -> list[DrawOp]:
        if self.state.game_over:
            return [
                ("text", "GAME OVER!", WIDTH // 2 - 50, HEIGHT // 2, 0xFF0000),
                ("text", "Caught by enemy!", WIDTH // 2 - 80, HEIGHT // 2 + 20, 0xFFFFFF),
            ]
        ops: list[DrawOp] = []
        for y, row in enumerate(self.state.grid):
            for x, cell in enumerate(row):
                ops.append(("image", "floor", x * TILE_SIZE, y * TILE_SIZE))
                overlay = _OVERLAYS.get(cell)
                if overlay is not None:
                    ops.append(("image", overlay, x * TILE_SIZE, y * TILE_SIZE))
        px, py = self.state.player_x * TILE_SIZE, self.state.player_y * TILE_SIZE
        ops.append(("image", "floor", px, py))
        ops.append(("image", "player", px, py))
        for enemy in self.state.enemies:
            ex, ey = enemy.x * TILE_SIZE, enemy.y * TILE_SIZE
            ops.append(("image", "floor", ex, ey))
            ops.append(("image", "enemy", ex, ey))
        ops.append(("text", f"MOVES: {self.state.move_count}", 10, 20, 0x000000))
        return ops

    def _draw(self, ops: Sequence[DrawOp]) -> None:
        screen = self._screen
        if screen is None:
            return
        screen.fill((0, 0, 0))
        for op in ops:
            if op[0] == "image":
                _, name, x, y = op
                surface = self._surfaces.get(name)
                if surface is not None:
                    screen.blit(surface, (x, y))
            elif self._font is not None:
                _, text, x, y, color = op
                screen.blit(self._font.render(text, True, _rgb(color)), (x, y))
        pygame.display.flip()

    def render(self) -> list[DrawOp]:
        """Build the current frame, draw it if a window is open, and return it.

        Each entry is ("image", texture, x, y) or ("text", text, x, y, colour),
        in drawing order, with positions in pixels.
        """
        ops = self._frame()
        self._draw(ops)
        return ops

    def _start_music(self) -> None:
        if self.music_path is None:
            return
        try:
            pygame.mixer.init(44100, -16, 2, 2048)
        except pygame.error as exc:
            print_formatted("SDL_mixer could not initialize! SDL_mixer Error: %s\n", str(exc))
            return
        try:
            pygame.mixer.music.load(str(self.music_path))
        except pygame.error as exc:
            print_formatted("Failed to load music! SDL_mixer Error: %s\n", str(exc))
            return
        try:
            pygame.mixer.music.play(-1)
        except pygame.error as exc:
            print_formatted("Failed to play music! SDL_mixer Error: %s\n", str(exc))
            return
        self._music_playing = True

    def _open_window(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(TITLE)
        pygame.font.init()
        self._font = pygame.font.Font(None, 24)
        self._surfaces = {name: _to_surface(image) for name, image in self.textures._named()}

    def run(self) -> Outcome:
        """Open the window and play until the game ends; return the outcome."""
        self._open_window()
        self._start_music()
        clock = pygame.time.Clock()
        try:
            self.render()
            while self.state.outcome is Outcome.PLAYING:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.state.outcome = Outcome.QUIT
                        break
                    if event.type == pygame.KEYDOWN:
                        self.state.handle_key(_KEYMAP.get(event.key, -1))
                        if self.state.outcome is not Outcome.PLAYING:
                            break
                        self.render()
                if self.state.outcome is Outcome.PLAYING:
                    self.state.tick()
                self.render()
                clock.tick(1000 // _FRAME_DELAY_MS)
            if self.state.game_over:
                self.render()
                pygame.time.wait(_GAME_OVER_DELAY_MS)
        finally:
            self.close()
        return self.state.outcome

    def close(self) -> None:
        """Stop the music and close the window; safe to call more than once."""
        if self.closed:
            return
        if pygame.mixer.get_init():
            if self._music_playing:
                pygame.mixer.music.stop()
                self._music_playing = False
            pygame.mixer.quit()
        if self._screen is not None:
            pygame.display.quit()
            self._screen = None
            pygame.quit()
        self._surfaces = {}
        self._font = None
        self.closed = True


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play the map named by the first argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return 1
    try:
        game_map = parse_map(args[0])
    except MapError as exc:
        print_formatted("Error\n%s\n", str(exc))
        return 1
    try:
        textures = load_textures(TEXTURE_DIRECTORY)
    except XpmError:
        print_formatted("Error: Failed to load textures.\n")
        return 1
    App(GameState.from_map(game_map), textures).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
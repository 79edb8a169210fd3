# solong

A small top-down puzzle game played on a tile map. Walk around, pick up
every collectible, avoid the wandering enemies and step onto the exit.

## Installing

```
pip install .
```

The game window and sound use `pygame`.

## Playing

```
solong maps/level1.ber
```

The command takes the path of a map file. Without an argument it exits
with status 1; a map that fails validation prints `Error` followed by
the reason and also exits with status 1.

Controls:

- `W` / Up arrow: move up
- `S` / Down arrow: move down
- `A` / Left arrow: move left
- `D` / Right arrow: move right
- `Esc` or closing the window: quit

Every key press prints `Total moves: N` on the terminal, and the window
shows `MOVES: N` in its top-left corner. Stepping onto the exit ends the
game only once every collectible has been picked up. Enemies patrol back
and forth, half of them horizontally and half vertically, taking one step
every 15 refreshes and turning back at walls and at the exit. Touching an
enemy shows a "GAME OVER!" screen for two seconds and ends the game.

## Map files

A map is a plain text file, one row per line, built from these characters:

| Char | Meaning                    |
|------|----------------------------|
| `1`  | wall                       |
| `0`  | floor                      |
| `P`  | player start (exactly one) |
| `E`  | exit (exactly one)         |
| `C`  | collectible (at least one) |
| `A`  | enemy                      |

The map must be rectangular, fully enclosed by walls, and every
collectible as well as the exit must be reachable from the player's
start. A map that breaks any of these rules is rejected with a message
explaining why.

Example:

```
1111111
1P0C0E1
10A0001
1111111
```

## Textures and music

Tiles are drawn from XPM images in a `textures_pokemon/` directory
(`wall.xpm`, `dalle.xpm`, `player.xpm`, `item.xpm`, `exit.xpm`,
`enemy.xpm`), and background music is played in a loop from
`mp3/Pokemon_battle.mp3`, both relative to the working directory.
If any texture cannot be read the game prints
`Error: Failed to load textures.` and stops; if the music cannot be
loaded, a message is printed and the game runs silently.

These image and sound files are not included in the package; supply your
own in those places.

## Using it as a library

The map loader and the game rules work without a window:

```python
from solong.gamemap import parse_map_text
from solong.game import GameState, Outcome

game_map = parse_map_text("11111\n1PCE1\n11111\n")
state = GameState.from_map(game_map)

state.handle_key(2)   # "D": step right onto the collectible
state.handle_key(2)   # step right onto the exit
assert state.outcome is Outcome.WON
```

- `solong.gamemap`: `parse_map(path)` and `parse_map_text(text)` return a
  validated `GameMap` or raise `MapError`; the individual checks
  (`check_elements`, `is_rectangular`, `has_wall_contour`, `flood_fill`,
  `check_valid_path`) are available on their own.
- `solong.game`: `GameState` with `handle_key(key)`, `tick()`,
  `move_enemies()` and `check_enemy_collision()`, each returning an
  `Outcome` (`PLAYING`, `WON`, `LOST`, `QUIT`). Keys are integer codes:
  53 Esc, 13/126 up, 1/125 down, 0/123 left, 2/124 right.
- `solong.app`: `App(state, textures).run()` opens the window;
  `App.render()` returns the list of drawing operations for the current
  frame; `load_textures(directory)` reads the six tile images; `main()`
  is the `solong` command.
- `solong.xpm`: `parse_xpm_file`, `parse_xpm_text` and `parse_xpm_lines`
  decode XPM images into an `XpmImage` of 0xAARRGGBB pixels, raising
  `XpmError` on bad data.
- `solong.colors`: `lookup_color(name)` resolves X11 colour names,
  ignoring case, to 0xRRGGBB (`"none"` gives -1).
- `solong.textutil` and `solong.printfmt`: small string helpers and a
  printf-style formatter (`format_printf`, `print_formatted`) supporting
  `%c %d %i %p %s %u %x %X %%`.
"""Game state: the player, the collectibles, the patrolling enemies."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Sequence

from solong.gamemap import COLLECTIBLE, ENEMY, EXIT, FLOOR, WALL, GameMap
from solong.printfmt import print_formatted

__all__ = ["Outcome", "Enemy", "GameState", "count_enemies"]

# An enemy takes one step every this many refreshes.
_MOVE_DELAY = 15

_KEY_ESCAPE = 53
_KEYS_UP = frozenset({13, 126})
_KEYS_DOWN = frozenset({1, 125})
_KEYS_LEFT = frozenset({0, 123})
_KEYS_RIGHT = frozenset({2, 124})


class Outcome(enum.Enum):
    """Where the game stands."""

    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    QUIT = "quit"


@dataclass
class Enemy:
    """An enemy patrolling along one axis.

    direction 0 is horizontal, 1 is vertical; move_counter counts the
    refreshes since its last step.
    """

    x: int
    y: int
    direction: int
    move_counter: int = 0


def count_enemies(rows: Sequence[str]) -> int:
    """Count the enemy tiles in the map."""
    return sum(row.count(ENEMY) for row in rows)


@dataclass
class GameState:
    """Everything that changes while a map is being played."""

    grid: list[list[str]]
    player_x: int
    player_y: int
    collectibles: int
    collected: int = 0
    move_count: int = 0
    enemies: list[Enemy] = field(default_factory=list)
    outcome: Outcome = Outcome.PLAYING

    @classmethod
    def from_map(cls, game_map: GameMap) -> GameState:
        """Start a game on a validated map, turning enemy tiles into floor."""
        grid = [list(row) for row in game_map.rows]
        enemies: list[Enemy] = []
        for y, row in enumerate(grid):
            for x, cell in enumerate(row):
                if cell == ENEMY:
                    enemies.append(Enemy(x, y, direction=len(enemies) % 2))
                    row[x] = FLOOR
        px, py = game_map.player
        return cls(
            grid=grid,
            player_x=px,
            player_y=py,
            collectibles=game_map.collectibles,
            enemies=enemies,
        )

    @property
    def game_over(self) -> bool:
        """True once an enemy has caught the player."""
        return self.outcome is Outcome.LOST

    @property
    def rows(self) -> tuple[str, ...]:
        """The current map as strings."""
        return tuple("".join(row) for row in self.grid)

    def _step_target(self, key: int) -> tuple[int, int] | None:
        x, y = self.player_x, self.player_y
        if key in _KEYS_UP:
            return x, y - 1
        if key in _KEYS_DOWN:
            return x, y + 1
        if key in _KEYS_LEFT:
            return x - 1, y
        if key in _KEYS_RIGHT:
            return x + 1, y
        return None

    def handle_key(self, key: int) -> Outcome:
        """Apply one key press and return the resulting outcome.

        Escape quits. Movement keys move the player unless a wall is in the
        way; every press, moving or not, counts as a refresh and so also
        advances the enemies.
        """
        if self.outcome is not Outcome.PLAYING:
            return self.outcome
        if key == _KEY_ESCAPE:
            self.outcome = Outcome.QUIT
            return self.outcome
        target = self._step_target(key)
        if target is not None:
            tx, ty = target
            if self.grid[ty][tx] != WALL:
                self.player_x, self.player_y = tx, ty
                self.move_count += 1
        print_formatted("Total moves: %d\n", self.move_count)

        cell = self.grid[self.player_y][self.player_x]
        if cell == COLLECTIBLE:
            self.grid[self.player_y][self.player_x] = FLOOR
            self.collected += 1
        elif cell == EXIT and self.collected == self.collectibles:
            self.outcome = Outcome.WON
            return self.outcome

        self.check_enemy_collision()
        self.move_enemies()
        return self.outcome

    def move_enemies(self) -> Outcome:
        """Advance every enemy by one refresh, then check for a catch."""
        if not self.enemies or self.game_over:
            return self.outcome
        for index, enemy in enumerate(self.enemies):
            enemy.move_counter += 1
            if enemy.move_counter < _MOVE_DELAY:
                continue
            enemy.move_counter = 0
            step = 1 if index % 2 == 0 else -1
            new_x, new_y = enemy.x, enemy.y
            if enemy.direction == 0:
                new_x += step
            else:
                new_y += step
            if self.grid[new_y][new_x] not in (WALL, EXIT):
                enemy.x, enemy.y = new_x, new_y
            elif enemy.direction == 0:
                enemy.x -= step
            else:
                enemy.y -= step
        return self.check_enemy_collision()

    def check_enemy_collision(self) -> Outcome:
        """End the game if an enemy stands on the player's tile."""
        if not self.enemies or self.outcome is not Outcome.PLAYING:
            return self.outcome
        for enemy in self.enemies:
            if (enemy.x, enemy.y) == (self.player_x, self.player_y):
                self.outcome = Outcome.LOST
                print_formatted("\n❌ Game Over! You were caught by an enemy! ❌\n")
                break
        return self.outcome

    def tick(self) -> Outcome:
        """Run one refresh of the main loop."""
        self.check_enemy_collision()
        if self.outcome is Outcome.PLAYING:
            self.move_enemies()
        return self.outcome
"""Player configuration system for the cube game."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from learner.minimax.difficulty import Difficulty

PlayerType = Literal["random", "computer", "human"]
PLAYER_TYPES = ("random", "computer", "human")


@dataclass
class PlayerConfig:
    """Configuration for a single player.

    Attributes:
        player_type: Type of player ('random', 'computer', or 'human')
        difficulty: Difficulty level (only for computer player)
        think_time: Add an artificial thinking delay (only for computer player)
        rng_seed: Random seed for this player (None = derived from the session seed)
        name: Display name (None = default for the player type)
    """

    player_type: PlayerType = "random"
    difficulty: Difficulty = Difficulty.MEDIUM
    think_time: bool = False
    rng_seed: int | None = None
    name: str | None = None

    @classmethod
    def random(cls, seed: int | None = None, name: str | None = None) -> PlayerConfig:
        """Create a random player configuration."""
        return cls(player_type="random", rng_seed=seed, name=name)

    @classmethod
    def human(cls, name: str | None = None) -> PlayerConfig:
        """Create a human player configuration."""
        return cls(player_type="human", name=name)

    @classmethod
    def computer(
        cls,
        difficulty: Difficulty = Difficulty.MEDIUM,
        *,
        think_time: bool = False,
        seed: int | None = None,
        name: str | None = None,
    ) -> PlayerConfig:
        """Create a computer player configuration.

        Args:
            difficulty: Difficulty level (easy, medium, hard, impossible)
            think_time: Add a difficulty-dependent thinking delay before moving
            seed: Random seed for the player (None = derived from the session seed)
            name: Display name
        """
        return cls(
            player_type="computer",
            difficulty=difficulty,
            think_time=think_time,
            rng_seed=seed,
            name=name,
        )


def _parse_bool(value: str) -> bool:
    return value.lower() in ["1", "true", "yes", "on"]


def parse_player_spec(spec: str) -> PlayerConfig:
    """Parse a player specification string into a PlayerConfig.

    Format:
        TYPE[:PARAM=VALUE,PARAM=VALUE,...]

    Examples:
        "random" -> Random player
        "human" -> Human player
        "computer" -> Computer at medium difficulty
        "computer:difficulty=hard" -> Computer at hard difficulty
        "computer:difficulty=easy,seed=7,think=1" -> Seeded easy computer with delay

    Supported parameters:
        - difficulty (str): easy, medium, hard, impossible (computer only)
        - think (bool): Thinking delay (1/0/true/false, computer only)
        - seed (int): Random seed (random and computer)
        - name (str): Display name (all types)
    """
    parts = spec.split(":", 1)
    player_type = parts[0].strip().lower()

    if player_type not in PLAYER_TYPES:
        raise ValueError(
            f"Invalid player type: {player_type}. Must be 'random', 'computer', or 'human'"
        )

    params = {}
    if len(parts) == 2:
        for param_pair in parts[1].split(","):
            param_pair = param_pair.strip()
            if not param_pair:
                continue
            if "=" not in param_pair:
                raise ValueError(f"Invalid parameter format: {param_pair}. Expected PARAM=VALUE")
            key, value = param_pair.split("=", 1)
            key = key.strip()
            value = value.strip()

            if key == "seed":
                params[key] = int(value)
            elif key == "difficulty":
                params[key] = Difficulty.parse(value)
            elif key == "think":
                params[key] = _parse_bool(value)
            elif key == "name":
                params[key] = value
            else:
                raise ValueError(f"Unknown parameter: {key}")

    if player_type != "computer":
        for key in ("difficulty", "think"):
            if key in params:
                raise ValueError(f"Parameter {key} only applies to computer players")
    if player_type == "human" and "seed" in params:
        raise ValueError("Parameter seed does not apply to human players")

    if player_type == "random":
        return PlayerConfig.random(seed=params.get("seed"), name=params.get("name"))
    elif player_type == "human":
        return PlayerConfig.human(name=params.get("name"))
    else:  # computer
        return PlayerConfig.computer(
            params.get("difficulty", Difficulty.MEDIUM),
            think_time=params.get("think", False),
            seed=params.get("seed"),
            name=params.get("name"),
        )

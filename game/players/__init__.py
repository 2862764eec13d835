"""Players."""

from .computer_cube_player import ComputerCubePlayer
from .cube_player import CubePlayer
from .human_cube_player import HumanCubePlayer
from .random_cube_player import RandomCubePlayer

__all__ = ["CubePlayer", "RandomCubePlayer", "ComputerCubePlayer", "HumanCubePlayer"]

"""Controller module for the cube game.

Contains the game controller, session and turn execution.
"""

from controller.cube_game_controller import CubeGameController

__all__ = ["CubeGameController"]

from backend.models.board import Board, Direction, build_solved_state, tile_image_cell
from backend.models.history import MoveHistory

__all__ = ["Board", "Direction", "MoveHistory", "build_solved_state", "tile_image_cell"]

from backend.engine.gameplay.game import GameSession

__all__ = ["GameSession"]

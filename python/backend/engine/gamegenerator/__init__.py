from backend.engine.gamegenerator.generator import ShuffleResult, Shuffler

__all__ = ["ShuffleResult", "Shuffler"]

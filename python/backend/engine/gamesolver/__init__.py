from backend.engine.gamesolver.solver import (
    AutoSolver,
    RunCounter,
    RunToken,
    SolveOutcome,
    SolverState,
)

__all__ = ["AutoSolver", "RunCounter", "RunToken", "SolveOutcome", "SolverState"]

# Background tasks - periodic alert evaluation

from .evaluation_loop import EvaluationLoop

__all__ = ["EvaluationLoop"]

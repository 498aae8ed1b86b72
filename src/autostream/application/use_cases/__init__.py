from .autostream import AutoStreamUseCase

__all__ = ["AutoStreamUseCase"]

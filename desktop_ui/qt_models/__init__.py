from .board_model import BoardModel

__all__ = ['BoardModel']

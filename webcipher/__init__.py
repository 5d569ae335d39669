from .engine import ALGORITHMS, DESCRIPTIONS, transform

__version__ = '1.0.0'

__all__ = ['ALGORITHMS', 'DESCRIPTIONS', 'transform']

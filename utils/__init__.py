"""
Utilidades compartidas: geometría de landmarks y constantes.
"""

from .constants import *
from .geometry import angle, dist, extract_features, normalise, FEATURE_NAMES

__all__ = [
    'angle',
    'dist',
    'extract_features',
    'normalise',
    'FEATURE_NAMES',
    'FINGERS',
    'HAND_SIDES',
    'HAND_CONNECTIONS',
    'NUM_LANDMARKS',
    'CONFIRM_FRAMES',
    'RESET_LABEL',
    'AI_MOVE_DELAY',
]

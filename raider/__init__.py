"""Raider - single-screen side-scrolling shooter"""

from .config import GameConfig
from .controls import InputState
from .session import GameSession, SessionState, SessionStateError
from .shooter_env import RaiderEnv, run_random_episode

__all__ = [
    'GameConfig',
    'GameSession',
    'InputState',
    'RaiderEnv',
    'SessionState',
    'SessionStateError',
    'run_random_episode',
]

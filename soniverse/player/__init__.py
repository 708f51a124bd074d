"""
Interactive cube player.

Key Components:
    PlayerSession   - Owns cube, voice pool and press state
    InputState      - RELEASED / PRESSED
"""

from soniverse.player.session import InputState, PlayerSession

__all__ = [
    "InputState",
    "PlayerSession",
]

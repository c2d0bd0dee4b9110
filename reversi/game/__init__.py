"""Game records and the turn-alternating play loop"""

from .play import GameResult, display_board, play_game, render_board
from .record import GameRecord, RecordFormatError, load_game, replay_game, save_game

__all__ = [
    'GameRecord',
    'GameResult',
    'RecordFormatError',
    'display_board',
    'load_game',
    'play_game',
    'render_board',
    'replay_game',
    'save_game',
]

"""
Card and guess codes.

Cards and guesses share one layout: ``code = 2 * rank + color`` where black is 0
and white is 1. Inputs are trusted to be in range (ids and codes 0..23, ranks
0..11); nothing here validates them.
"""
from enum import Enum
from typing import Tuple


class Color(str, Enum):
    BLACK = "black"
    WHITE = "white"


NUM_RANKS = 12
NUM_CODES = 2 * NUM_RANKS


def color_of(code: int) -> Color:
    return Color.BLACK if code % 2 == 0 else Color.WHITE


def encode_guess(rank: int, color: Color) -> int:
    return 2 * rank + (1 if color == Color.WHITE else 0)


def decode_guess(code: int) -> Tuple[int, Color]:
    return code // 2, color_of(code)


# Dealt card ids use the same bits as guesses.
encode_card = encode_guess


def decode_card(card_id: int) -> Tuple[int, Color]:
    return card_id // 2, color_of(card_id)


def describe_card(card_id: int) -> str:
    rank, color = decode_card(card_id)
    return f"{color.value} {rank}"


def describe_guess(code: int) -> str:
    rank, color = decode_guess(code)
    return f"{color.value} {rank}"

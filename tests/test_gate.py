import itertools

from builders import attacker, snapshot
from coda_client.gate import can_attack, can_register, can_stay, has_finished


def test_nothing_is_allowed_before_the_first_fetch():
    assert not has_finished(None)
    assert not can_attack(None)
    assert not can_stay(None)
    assert not can_register(None)


def test_attack_needs_our_turn_and_a_staged_card():
    assert can_attack(snapshot(attacker_card=attacker()))
    assert not can_attack(snapshot(attacker_card=None))
    assert not can_attack(snapshot(attacker_card=attacker(), current_turn=2))
    assert not can_attack(snapshot(attacker_card=attacker(), your_player_index=None))


def test_stay_also_needs_the_board_to_allow_it():
    assert not can_stay(snapshot(attacker_card=attacker(), can_stay=False))
    assert can_stay(snapshot(attacker_card=attacker(), can_stay=True))
    assert not can_stay(snapshot(attacker_card=None, can_stay=True))


def test_finished_game_blocks_attacks():
    finished = snapshot(attacker_card=attacker(), can_stay=True, winner=1)
    assert has_finished(finished)
    assert not can_attack(finished)
    assert not can_stay(finished)


def test_predicates_are_consistent_across_board_combinations():
    for turn, you, staged, stay, winner in itertools.product(
        (None, 1, 2), (None, 1, 2), (True, False), (True, False), (None, 1)
    ):
        s = snapshot(
            current_turn=turn,
            your_player_index=you,
            attacker_card=attacker() if staged else None,
            can_stay=stay,
            winner=winner,
        )
        if can_stay(s):
            assert can_attack(s)
        if has_finished(s):
            assert not can_attack(s)


def test_not_started_room_cannot_finish_or_be_attacked():
    waiting = snapshot(status="not_started", registered=0, your_index=None)
    assert not has_finished(waiting)
    assert not can_attack(waiting)


def test_register_is_offered_in_an_open_room_we_have_not_joined():
    assert can_register(snapshot(status="not_started", registered=1, your_index=None))


def test_register_is_hidden_once_we_hold_a_seat():
    assert not can_register(snapshot(status="not_started", registered=1, your_index=1))


def test_register_is_hidden_once_turns_are_running():
    assert not can_register(snapshot(current_turn=1, your_player_index=None, your_index=None))

import pytest

from jobswipe.deck import DeckSnapshot, SwipeDeck


def test_swipes_classify_and_advance():
    deck = SwipeDeck(["a", "b", "c"])

    assert deck.swipe("right") == "a"
    assert deck.swipe("left") == "b"
    assert deck.swipe("up") == "c"

    assert deck.liked == {"a", "c"}
    assert deck.passed == {"b"}
    assert deck.super_liked == {"c"}
    assert deck.current is None
    assert deck.remaining == 0


def test_swipe_past_the_end_is_a_no_op():
    deck = SwipeDeck(["a"])
    deck.swipe("interested")

    assert deck.swipe("interested") is None
    assert deck.index == 1
    assert deck.decided() == {"a"}


def test_unknown_direction_raises():
    deck = SwipeDeck(["a"])
    with pytest.raises(ValueError):
        deck.swipe("sideways")
    assert deck.index == 0


def test_undo_walks_back_and_forgets():
    deck = SwipeDeck(["a", "b"])
    deck.swipe("up")
    deck.swipe("left")

    assert deck.undo() == "b"
    assert deck.passed == set()
    assert deck.undo() == "a"
    assert deck.liked == set() and deck.super_liked == set()
    assert deck.current == "a"

    # Nothing left to undo
    assert deck.undo() is None
    assert deck.index == 0


def test_reset_keeps_the_jobs():
    deck = SwipeDeck(["a", "b"])
    deck.swipe("right")
    deck.reset()

    assert deck.index == 0
    assert deck.decided() == set()
    assert deck.jobs == ["a", "b"]


def test_snapshot_and_restore_carry_only_decisions():
    deck = SwipeDeck(["a", "b", "c"])
    deck.swipe("right")
    deck.swipe("left")

    snapshot = deck.snapshot()
    assert snapshot == DeckSnapshot(liked=["a"], passed=["b"], super_liked=[])

    restored = SwipeDeck.restore(DeckSnapshot.model_validate_json(snapshot.model_dump_json()), ["c", "d"])
    assert restored.current == "c"
    assert restored.liked == {"a"}
    assert restored.passed == {"b"}


def test_add_jobs_appends_a_page():
    deck = SwipeDeck(["a"])
    deck.swipe("left")
    deck.add_jobs(["b", "c"])

    assert deck.current == "b"
    assert deck.remaining == 2

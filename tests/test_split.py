import pytest

from billsplit.services.split import apportion_largest_remainder, merge_shares, split_amount, split_balanced


def test_split_amount_even():
    shares = split_amount(1000, ["a", "b", "c", "d"])
    assert shares == {"a": 250, "b": 250, "c": 250, "d": 250}


def test_split_amount_remainder_goes_to_first_recipients():
    shares = split_amount(1001, ["a", "b", "c"])
    assert sum(shares.values()) == 1001
    assert shares == {"a": 334, "b": 334, "c": 333}


def test_split_amount_rejects_empty_and_negative():
    with pytest.raises(ValueError):
        split_amount(100, [])
    with pytest.raises(ValueError):
        split_amount(-1, ["a"])


def test_split_balanced_prefers_lowest_running_total():
    shares = split_balanced(5, ["a", "b", "c"], {"a": 100, "b": 10, "c": 10})
    assert shares == {"a": 1, "b": 2, "c": 2}


def test_split_balanced_ties_keep_recipient_order():
    shares = split_balanced(1, ["b", "a"], {"a": 0, "b": 0})
    assert shares == {"b": 1, "a": 0}


def test_apportion_largest_remainder_exact():
    shares = apportion_largest_remainder(100, [("p1", 700), ("p2", 300)])
    assert shares == {"p1": 70, "p2": 30}


def test_apportion_largest_remainder_biggest_fraction_wins():
    # raw shares 6.6 / 3.3 / 0.1 -> floors 6/3/0, leftover 1 to the 0.6 fraction
    shares = apportion_largest_remainder(10, [("a", 66), ("b", 33), ("c", 1)])
    assert shares == {"a": 7, "b": 3, "c": 0}


def test_apportion_largest_remainder_ties_follow_order():
    shares = apportion_largest_remainder(100, [("x", 1), ("y", 1), ("z", 1)])
    assert shares == {"x": 34, "y": 33, "z": 33}


def test_apportion_largest_remainder_requires_positive_weights():
    with pytest.raises(ValueError):
        apportion_largest_remainder(100, [("a", 0), ("b", 0)])


def test_merge_shares():
    merged = merge_shares([{"a": 1, "b": 2}, {"b": 3, "c": 4}])
    assert merged == {"a": 1, "b": 5, "c": 4}

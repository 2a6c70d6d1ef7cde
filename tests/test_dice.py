from collections import Counter

import pytest

from dicegen.dice import DiceSet, Die
from dicegen.errors import ConfigurationError
from dicegen.random_source import PythonRandomSource
from dicegen.types import DiceType, WeightedEntry


class ScriptedSource:
    """Returns queued values and records every requested maximum."""

    def __init__(self, *values: int) -> None:
        self._values = list(values)
        self.calls: list[int] = []

    def next_int(self, maximum: int) -> int:
        self.calls.append(maximum)
        value = self._values.pop(0)
        assert 0 <= value <= maximum
        return value


def test_range_rolls_stay_within_bounds():
    die = Die.range(3, 8, random_source=PythonRandomSource(1))

    rolls = {die.roll() for _ in range(500)}

    assert rolls <= set(range(3, 9))
    assert rolls == set(range(3, 9))


def test_range_offsets_draw_by_low_bound():
    source = ScriptedSource(0, 5)
    die = Die.range(-2, 3, random_source=source)

    assert die.roll() == -2
    assert die.roll() == 3
    assert source.calls == [5, 5]


def test_single_value_range_is_allowed():
    die = Die.range(4, 4, random_source=ScriptedSource(0))
    assert die.roll() == 4


def test_range_rejects_inverted_bounds():
    with pytest.raises(ConfigurationError):
        Die.range(5, 1)


def test_selection_returns_member_of_values():
    values = [2, 4, 8, 16]
    die = Die.selection(values, random_source=PythonRandomSource(7))

    for _ in range(200):
        assert die.roll() in values


def test_selection_indexes_values_in_order():
    source = ScriptedSource(2)
    die = Die.selection([10, 20, 30], random_source=source)

    assert die.roll() == 30
    assert source.calls == [2]


def test_selection_requires_values():
    with pytest.raises(ConfigurationError):
        Die.selection([])


def test_constant_never_consumes_randomness():
    source = ScriptedSource()
    die = Die.constant(6, random_source=source)

    assert [die.roll() for _ in range(5)] == [6] * 5
    assert source.calls == []
    assert die.type is DiceType.CONSTANT


def test_weighted_never_picks_zero_weight_and_respects_ratio():
    die = Die.weighted([(1, 1), (2, 0), (3, 3)], random_source=PythonRandomSource(1234))

    counts = Counter(die.roll() for _ in range(20000))

    assert counts[2] == 0
    ratio = counts[3] / counts[1]
    assert 2.7 <= ratio <= 3.3


def test_weighted_first_cumulative_match_wins():
    # cumulative sums: 2, 2, 5 -> draws are offset into [1, 5]
    source = ScriptedSource(0, 1, 2, 4)
    die = Die.weighted([(10, 2), (20, 0), (30, 3)], random_source=source)

    assert [die.roll() for _ in range(4)] == [10, 10, 30, 30]
    assert source.calls == [4, 4, 4, 4]


def test_weighted_single_entry_short_circuits():
    source = ScriptedSource()
    die = Die.weighted([(9, 5)], random_source=source)

    assert die.roll() == 9
    assert die.last_result == 9
    assert source.calls == []


def test_weighted_zero_total_returns_first_entry():
    source = ScriptedSource()
    die = Die.weighted([WeightedEntry(value=4, weight=0), WeightedEntry(value=5, weight=0)], random_source=source)

    assert die.roll() == 4
    assert source.calls == []


def test_weighted_rejects_empty_and_negative_entries():
    with pytest.raises(ConfigurationError):
        Die.weighted([])
    with pytest.raises(ConfigurationError):
        Die.weighted([(1, 2), (2, -1)])


@pytest.mark.parametrize("weight", [0.5, "2", True])
def test_weighted_rejects_non_integer_weights(weight):
    with pytest.raises(ConfigurationError):
        Die.weighted([(1, 2), (2, weight)])


def test_last_result_and_reset():
    die = Die.constant(3)
    assert die.last_result is None

    die.roll()
    assert die.last_result == 3

    die.reset()
    assert die.last_result is None


def test_dice_set_sums_every_die():
    dice = [Die.constant(2), Die.range(1, 6, random_source=ScriptedSource(3)), Die.constant(-1)]
    dice_set = DiceSet("Lucky", dice, description="A lucky pair")

    assert dice_set.result is None
    assert dice_set.roll() == 2 + 4 - 1
    assert dice_set.result == 5
    assert [die.last_result for die in dice_set.dice] == [2, 4, -1]


def test_cursed_dice_set_rolls_zero_without_rolling():
    source = ScriptedSource()
    dice_set = DiceSet("Hexed", [Die.range(1, 6, random_source=source)], cursed=True)

    assert dice_set.roll() == 0
    assert source.calls == []


def test_dice_set_reset_clears_dice():
    dice_set = DiceSet("Plain", [Die.constant(1), Die.constant(2)])
    dice_set.roll()

    dice_set.reset()

    assert dice_set.result is None
    assert all(die.last_result is None for die in dice_set.dice)


def test_dice_set_requires_dice():
    with pytest.raises(ConfigurationError):
        DiceSet("Empty", [])

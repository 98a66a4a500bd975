"""Ready-made condition sets for common dice games.

Presets are built without a die; callers pick one with ConditionSet.for_dice()
(or presets(dice_kind)) before simulating.
"""

from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations, permutations

from roller.conditions.models import (
    Bound,
    Comparison,
    Conjunction,
    DiceKind,
    RawCondition,
    Reduction,
    ValueRange,
)

FACES = range(1, 7)


class Game(str, Enum):
    EXAMPLES = "Examples"
    YAHTZEE = "Yahtzee"
    BACKGAMMON = "Backgammon"
    FARKLE = "Farkle"
    MONOPOLY = "Monopoly"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    Game.EXAMPLES: "Basic examples to get you started",
    Game.YAHTZEE: "Try to see if you can roll a Yahtzee",
    Game.BACKGAMMON: "Sixes or Doubles to move pips",
    Game.FARKLE: "Get as many points without rolling a Farkle",
    Game.MONOPOLY: "Double or Sum of Two Dice to get Boardwalk",
}


@dataclass
class ConditionSet:
    """A named list of clauses evaluated together."""

    name: str
    conditions: list[RawCondition] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name or "Event"

    def for_dice(self, dice_kind: DiceKind | None) -> "ConditionSet":
        """Return a copy with every clause targeting `dice_kind`."""
        return ConditionSet(
            name=self.name,
            conditions=[c.with_dice_kind(dice_kind) for c in self.conditions],
        )


def _count(
    quantity: int,
    value: int,
    bound: Bound = Bound.EXACTLY,
    conjunction: Conjunction = Conjunction.OR,
) -> RawCondition:
    """`bound quantity dice equal to value`."""
    return RawCondition(
        bound=bound,
        quantity=quantity,
        reduction=Reduction.EACH,
        comparison=Comparison.EQUALS,
        value=value,
        conjunction=conjunction,
    )


def _at_least_one(value: int, conjunction: Conjunction = Conjunction.AND) -> RawCondition:
    return _count(1, value, Bound.AT_LEAST, conjunction)


def _any_of_a_kind(quantity: int, bound: Bound = Bound.AT_LEAST) -> list[RawCondition]:
    return [_count(quantity, v, bound) for v in FACES]


def _straight(start: int, length: int) -> list[RawCondition]:
    """At least one of each face start..start+length-1, for every such start up to 6."""
    clauses = []
    for low in range(start, 6 - length + 2):
        run = [_at_least_one(v) for v in range(low, low + length)]
        run[0] = _at_least_one(low, Conjunction.OR)
        clauses.extend(run)
    return clauses


def _pairs_of(groups, quantities: tuple[int, ...]) -> list[RawCondition]:
    """OR over groups of ANDed `exactly q dice equal v` clauses."""
    clauses = []
    for values in groups:
        for i, (value, quantity) in enumerate(zip(values, quantities)):
            conjunction = Conjunction.OR if i == 0 else Conjunction.AND
            clauses.append(_count(quantity, value, Bound.EXACTLY, conjunction))
    return clauses


def _build() -> dict[Game, list[ConditionSet]]:
    return {
        Game.EXAMPLES: [
            ConditionSet("Exactly Two, Ones", [_count(2, 1, conjunction=Conjunction.FIRST)]),
            ConditionSet(
                "Avg Between 3 & 5",
                [
                    RawCondition(
                        bound=Bound.EXACTLY,
                        reduction=Reduction.AVERAGE,
                        comparison=Comparison.BETWEEN,
                        value_range=ValueRange(3, 5),
                        conjunction=Conjunction.FIRST,
                    )
                ],
            ),
            ConditionSet(
                "Snake Eyes",
                [
                    RawCondition(
                        bound=Bound.AT_LEAST,
                        quantity=2,
                        reduction=Reduction.CONSECUTIVE,
                        comparison=Comparison.EQUALS,
                        value=1,
                        conjunction=Conjunction.FIRST,
                    )
                ],
            ),
        ],
        Game.MONOPOLY: [
            ConditionSet("Doubles", _any_of_a_kind(2, Bound.EXACTLY)),
            ConditionSet(
                "Sum of 2 Dice",
                [
                    RawCondition(
                        bound=Bound.EXACTLY,
                        quantity=2,
                        reduction=Reduction.SUM,
                        comparison=Comparison.EQUALS,
                        value=7,
                        conjunction=Conjunction.FIRST,
                    )
                ],
            ),
        ],
        Game.YAHTZEE: [
            ConditionSet("Two of a Kind", _any_of_a_kind(2)),
            ConditionSet("Three of a Kind", _any_of_a_kind(3)),
            ConditionSet("Four of a Kind", _any_of_a_kind(4)),
            ConditionSet("Full House", _pairs_of(permutations(FACES, 2), (3, 2))),
            ConditionSet("Small Straight", _straight(1, 4)),
            ConditionSet("Large Straight", _straight(1, 5)),
            ConditionSet("Yahtzee", _any_of_a_kind(5, Bound.EXACTLY)),
            ConditionSet(
                "Chance",
                [
                    RawCondition(
                        bound=Bound.EXACTLY,
                        quantity=5,
                        reduction=Reduction.SUM,
                        comparison=Comparison.EQUALS,
                        value=15,
                        conjunction=Conjunction.FIRST,
                    )
                ],
            ),
        ],
        Game.BACKGAMMON: [
            ConditionSet("Double Sixes", [_count(2, 6, conjunction=Conjunction.FIRST)]),
            ConditionSet("Any Double", _any_of_a_kind(2, Bound.EXACTLY)),
        ],
        Game.FARKLE: [
            ConditionSet("At Least One, 1", [_at_least_one(1, Conjunction.FIRST)]),
            ConditionSet("At Least One, 5", [_at_least_one(5, Conjunction.FIRST)]),
            ConditionSet(
                "At Least One, 1 or 5",
                [_at_least_one(1, Conjunction.FIRST), _at_least_one(5, Conjunction.OR)],
            ),
            ConditionSet("Any Three of a Kind", _any_of_a_kind(3)),
            ConditionSet("Any Four of a Kind", _any_of_a_kind(4)),
            ConditionSet("Any Five of a Kind", _any_of_a_kind(5)),
            ConditionSet("Any Six of a Kind", _any_of_a_kind(6)),
            ConditionSet("1-6 Straight", _straight(1, 6)),
            ConditionSet("Three Pairs", _pairs_of(combinations(FACES, 3), (2, 2, 2))),
            ConditionSet(
                "Four of Any Number w/ a Pair", _pairs_of(permutations(FACES, 2), (4, 2))
            ),
            ConditionSet("Two Triplets", _pairs_of(combinations(FACES, 2), (3, 3))),
        ],
    }


def presets(dice_kind: DiceKind | None = None) -> dict[Game, list[ConditionSet]]:
    """All preset condition sets by game, optionally bound to a die."""
    return {
        game: [condition_set.for_dice(dice_kind) for condition_set in sets]
        for game, sets in _build().items()
    }


def get_preset(game: Game, name: str, dice_kind: DiceKind | None = None) -> ConditionSet:
    """Look up one preset by game and name.

    Raises:
        KeyError: If the game has no preset with that name
    """
    for condition_set in presets(dice_kind)[game]:
        if condition_set.name == name:
            return condition_set
    raise KeyError(f"No preset {name!r} for {game.value}")

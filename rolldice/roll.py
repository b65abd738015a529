"""
Dice module for throwing dice.

A roll is described by a RollSpec, usually from rolldice.notation.
The RollEngine throws every die of the spec independently:

    Draw a value in [1, sides].
    While the last value is <= the reroll threshold and the die still has
    reroll attempts left, draw again.

Every draw is kept in order, so a die's attempts read as the history of its
rerolls and the last attempt is the value that counts.
Selecting kept dice and totals is left to rolldice.present.
"""
import collections
import logging

import rolldice.exc
import rolldice.util
from rolldice.util import ReprMixin

SPEC_FIELDS = ['dice_count', 'dice_sides', 'keep_highest', 'keep_lowest',
               'reroll_threshold', 'reroll_limit']


class RollSpec(collections.namedtuple('RollSpec', SPEC_FIELDS)):
    """
    The immutable description of a single roll.
    Every optional field defaults to 0, which disables it.

    Attributes:
        dice_count: The number of dice to roll.
        dice_sides: The number of sides of each die.
        keep_highest: The number of highest results to keep.
        keep_lowest: The number of lowest results to keep.
        reroll_threshold: Reroll while the last result is <= this value.
        reroll_limit: The maximum number of rerolls per die.
    """
    __slots__ = ()

    def __new__(cls, dice_count, dice_sides, keep_highest=0, keep_lowest=0,
                reroll_threshold=0, reroll_limit=0):
        return super().__new__(cls, dice_count, dice_sides, keep_highest, keep_lowest,
                               reroll_threshold, reroll_limit)

    def __str__(self):
        """ The canonical notation of this spec. """
        msg = '{}d{}'.format(self.dice_count, self.dice_sides)
        for marker, value in (('kh', self.keep_highest), ('kl', self.keep_lowest),
                              ('rr', self.reroll_threshold), ('lim', self.reroll_limit)):
            if value:
                msg += marker + str(value)

        return msg

    @property
    def max_draws(self):
        """ The most values the engine can draw for this spec. """
        return self.dice_count * (self.reroll_limit + 1)


class RollResult(tuple):
    """
    The attempts of every die thrown for a spec, in order.
    Each entry is a tuple of the values drawn for one die, the last value counts.

    Attributes:
        spec: The RollSpec that was thrown.
    """
    def __new__(cls, rolls=None, *, spec=None):
        obj = super().__new__(cls, (tuple(attempts) for attempts in (rolls if rolls else [])))
        obj.spec = spec
        return obj

    def __repr__(self):
        return "RollResult(spec={!r}, rolls={!r})".format(self.spec, tuple(self))

    @property
    def finals(self):
        """ The value that counts for each die, the last attempt. """
        return tuple(attempts[-1] for attempts in self)

    @property
    def rerolls(self):
        """ The total number of extra draws made over all dice. """
        return sum(len(attempts) - 1 for attempts in self)


class RollEngine(ReprMixin):
    """
    Throw the dice of a RollSpec with a given random source.

    Attributes:
        rng: Any object that behaves like numpy.random.Generator.integers(low, high),
             high is exclusive.
    """
    _repr_keys = ['rng']

    def __init__(self, rng):
        self.rng = rng

    def draw(self, sides):
        """
        Draw a single value in [1, sides].

        Raises:
            RandomSourceFailure: The random source failed to produce a value.
        """
        try:
            return int(self.rng.integers(1, sides + 1))
        except Exception as exc:
            raise rolldice.exc.RandomSourceFailure(
                "Random source failed drawing a d{}: {}".format(sides, exc)) from exc

    def roll_die(self, spec):
        """
        Throw one die of the spec, rerolling while allowed.

        Returns:
            A list of the values drawn, in order.
        """
        attempts = [self.draw(spec.dice_sides)]
        rerolls = 0
        while attempts[-1] <= spec.reroll_threshold and rerolls < spec.reroll_limit:
            attempts += [self.draw(spec.dice_sides)]
            rerolls += 1

        return attempts

    def roll(self, spec):
        """
        Throw every die of the spec independently.

        Raises:
            RandomSourceFailure: The random source failed to produce a value.

        Returns:
            A RollResult with one attempt sequence per die.
        """
        result = RollResult([self.roll_die(spec) for _ in range(spec.dice_count)], spec=spec)
        logging.getLogger('rolldice.roll').debug('Rolled %s: %s', spec, list(result))

        return result


def roll_dice(spec, rng=None):
    """
    Throw the spec with the provided random source.
    If no source is provided a freshly seeded one is created.

    Returns:
        A RollResult for the spec.
    """
    if rng is None:
        _, rng = rolldice.util.new_rng()

    return RollEngine(rng).roll(spec)

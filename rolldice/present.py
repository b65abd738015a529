"""
Format a RollResult for the user according to the flags.

Keep policy:
    kh/kl given in the notation always win.
    Otherwise advantage keeps the highest die and disadvantage the lowest.
    Advantage and disadvantage together cancel out.
"""
import heapq
import logging

from rolldice.util import ReprMixin

DEBUG_LINES = [
    ('Dice Count', 'dice_count'),
    ('Dice Sides', 'dice_sides'),
    ('Keep Highest', 'keep_highest'),
    ('Keep Lowest', 'keep_lowest'),
    ('Reroll', 'reroll_threshold'),
    ('Limit', 'reroll_limit'),
]
DEBUG_FLAGS = [
    ('Advantage', 'advantage'),
    ('Disadvantage', 'disadvantage'),
    ('Last', 'last'),
    ('Hide', 'hide'),
    ('Total', 'total'),
]


class RollFlags(ReprMixin):
    """
    The display switches given on the command line.

    Attributes:
        advantage: Keep the highest die unless notation says otherwise.
        disadvantage: Keep the lowest die unless notation says otherwise.
        last: Only show the last attempt of every die.
        hide: Only show the kept dice.
        total: Also show the sum of the kept dice.
    """
    _repr_keys = ['advantage', 'disadvantage', 'last', 'hide', 'total']

    def __init__(self, *, advantage=False, disadvantage=False, last=False, hide=False, total=False):
        self.advantage = advantage
        self.disadvantage = disadvantage
        self.last = last
        self.hide = hide
        self.total = total

    def __eq__(self, other):
        return isinstance(other, RollFlags) and all(
            getattr(self, key) == getattr(other, key) for key in self._repr_keys)

    @classmethod
    def from_args(cls, args):
        """ Build the flags from an argparse.Namespace. """
        return cls(**{key: getattr(args, key, False) for key in cls._repr_keys})


def keep_counts(spec, flags):
    """
    Decide how many highest or lowest dice to keep.

    Returns:
        (high, low): At most one of them is not 0. Both 0 keeps every die.
    """
    if spec.keep_highest or spec.keep_lowest:
        if flags.advantage or flags.disadvantage:
            logging.getLogger('rolldice.present').info(
                'Notation keep option overrides advantage/disadvantage flags for %s', spec)
        return spec.keep_highest, spec.keep_lowest

    if flags.advantage and not flags.disadvantage:
        return 1, 0
    if flags.disadvantage and not flags.advantage:
        return 0, 1

    return 0, 0


def select_kept(finals, high=0, low=0):
    """
    Select the dice that count.
    Ties between equal values favour the earlier die.

    Args:
        finals: The value that counts of each die.
        high: Keep this many highest dice.
        low: Keep this many lowest dice.

    Returns:
        A set of the indices of kept dice.
    """
    indices = range(len(finals))
    if high:
        return set(heapq.nlargest(high, indices, key=finals.__getitem__))
    if low:
        return set(heapq.nsmallest(low, indices, key=finals.__getitem__))

    return set(indices)


def format_die(attempts, *, last=False, dropped=False):
    """
    Format the attempts of one die.
    Rerolled attempts are suffixed with r, dropped dice are struck through.

    Examples:
        (1, 2, 5) -> '1r 2r 5'
        (1, 2, 5) with last -> '5'
        (3,) dropped -> '~~3~~'
    """
    if last:
        attempts = attempts[-1:]
    msg = ' '.join(['{}r'.format(val) for val in attempts[:-1]] + [str(attempts[-1])])

    return '~~' + msg + '~~' if dropped else msg


def format_result(result, flags=None):
    """
    Using a RollResult, combine the dice into the expected output format.

    Returns:
        A string of the form: 4d6kh3 = (4 + ~~1~~ + 6 + 5) = 15
    """
    flags = flags if flags else RollFlags()
    finals = result.finals
    kept = select_kept(finals, *keep_counts(result.spec, flags))

    parts = []
    for ind, attempts in enumerate(result):
        dropped = ind not in kept
        if dropped and flags.hide:
            continue
        parts += [format_die(attempts, last=flags.last, dropped=dropped)]

    msg = '{} = ({})'.format(result.spec, ' + '.join(parts))
    if flags.total:
        msg += ' = {}'.format(sum(finals[ind] for ind in kept))

    return msg


def format_debug(spec, flags=None):
    """
    Dump every field of the spec and every flag, one per line.
    """
    flags = flags if flags else RollFlags()
    lines = ['{}: {}'.format(label, getattr(spec, key)) for label, key in DEBUG_LINES]
    lines += ['{}: {}'.format(label, bool(getattr(flags, key))) for label, key in DEBUG_FLAGS]

    return '\n'.join(lines)

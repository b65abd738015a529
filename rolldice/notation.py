"""
Parse the compact dice notation into a RollSpec.

    [count]d[sides](kh[n] | kl[n])(rr[n](lim[n]))

Parsing happens in two passes:
    tokenize splits the cleaned text on the marker keywords. Each marker owns
    the text up to the next marker found later in the line, wherever it is.
    parse_notation validates the tokens and builds the RollSpec, failing
    on the first problem found.

Examples valid:
    4d6, 4d6kh3, 2d20kl1, 2d6rr2lim1, 4 d6 kh3
Examples invalid:
    d6, kh1, 2d6kh1kl1, 2d6lim1, 4d6kh5
"""
import collections
import logging
import re

import rolldice.exc
from rolldice.roll import RollSpec

DICE = 'd'
KEEP_HIGH = 'kh'
KEEP_LOW = 'kl'
REROLL = 'rr'
LIMIT = 'lim'
COUNT = 'count'
MARKERS = (LIMIT, KEEP_HIGH, KEEP_LOW, REROLL, DICE)
FIELDS = {
    COUNT: 'dice_count',
    DICE: 'dice_sides',
    KEEP_HIGH: 'keep_highest',
    KEEP_LOW: 'keep_lowest',
    REROLL: 'reroll_threshold',
    LIMIT: 'reroll_limit',
}
LIMIT_DIE_NUMBER = 1000
LIMIT_DIE_SIDES = 2**31 - 1
LIMIT_DRAWS = 100000
IS_NUMBER = re.compile(r'\d+', re.ASCII)
IS_SPACE = re.compile(r'\s+')

Token = collections.namedtuple('Token', ['marker', 'text', 'pos'])


def clean_notation(text):
    """ Remove all whitespace from the notation. """
    return IS_SPACE.sub('', text)


def tokenize(text):
    """
    Split a cleaned notation into tokens, one per marker found.

    The first token is always the text before any marker, its marker is None.
    Every other token owns the text between the end of its marker and the start
    of the next marker, or the end of the line.

    Returns:
        [Token(marker, text, pos), ...] in order of appearance.
    """
    tokens = []
    marker, start, pos = None, 0, 0
    while pos < len(text):
        found = None
        for cand in MARKERS:
            if text.startswith(cand, pos):
                found = cand
                break

        if not found:
            pos += 1
            continue

        tokens += [Token(marker, text[start:pos], start - len(marker) if marker else 0)]
        marker = found
        pos += len(found)
        start = pos

    tokens += [Token(marker, text[start:], start - len(marker) if marker else 0)]

    return tokens


def parse_field(token, notation):
    """
    Parse the integer argument of a token.

    Raises:
        MalformedNotation: The text is empty or not an unsigned integer.

    Returns:
        The integer value of the token.
    """
    field = token.marker if token.marker else COUNT
    if not IS_NUMBER.fullmatch(token.text):
        reason = 'is missing' if not token.text else "'{}' is not a number".format(token.text)
        raise rolldice.exc.MalformedNotation(
            "Value for {} {} at position {}.".format(field, reason, token.pos),
            field=field, notation=notation)

    return int(token.text)


def parse_notation(text):
    """
    Take a complete dice notation and return the RollSpec it describes.
    All whitespace is ignored, absent options are 0.

    Raises:
        MalformedNotation: No 'd' marker, a repeated marker or a field is not an integer.
        ConflictingOptions: Both kh and kl were given.
        DependentOptionMissing: lim was given without rr.
        OutOfRangeOption: Keeping more dice than rolled, rerolling above the sides,
                          rolling no dice or dice with no sides, or going
                          over the dice, sides or draw limits.

    Returns:
        A RollSpec.
    """
    notation = clean_notation(text)
    tokens = tokenize(notation)
    present = [tok.marker for tok in tokens[1:]]

    if DICE not in present:
        raise rolldice.exc.MalformedNotation(
            "Notation must have a dice count and sides, like 4d6.",
            field=DICE, notation=notation)
    if KEEP_HIGH in present and KEEP_LOW in present:
        raise rolldice.exc.ConflictingOptions(
            "Cannot keep both highest (kh) and lowest (kl).",
            field=KEEP_LOW, notation=notation)
    if LIMIT in present and REROLL not in present:
        raise rolldice.exc.DependentOptionMissing(
            "A reroll limit (lim) requires a reroll (rr).",
            field=LIMIT, notation=notation)

    values = {}
    for token in tokens:
        field = token.marker if token.marker else COUNT
        if FIELDS[field] in values:
            raise rolldice.exc.MalformedNotation(
                "Option {} given more than once at position {}.".format(field, token.pos),
                field=field, notation=notation)
        values[FIELDS[field]] = parse_field(token, notation)

    spec = RollSpec(**values)
    check_ranges(spec, notation)
    logging.getLogger('rolldice.notation').debug("Parsed '%s' into %r", notation, spec)

    return spec


def check_ranges(spec, notation=None):
    """
    Check the values of the spec against each other.

    Raises:
        OutOfRangeOption: A value is impossible for the roll.
    """
    checks = [
        (spec.dice_count > 0, COUNT, "Must roll at least one die."),
        (spec.dice_sides > 0, DICE, "Dice must have at least one side."),
        (spec.dice_count <= LIMIT_DIE_NUMBER, COUNT,
         "Cannot roll more than {} dice.".format(LIMIT_DIE_NUMBER)),
        (spec.dice_sides <= LIMIT_DIE_SIDES, DICE,
         "Dice cannot have more than {} sides.".format(LIMIT_DIE_SIDES)),
        (spec.keep_highest <= spec.dice_count, KEEP_HIGH,
         "Cannot keep the highest {} of {} dice.".format(spec.keep_highest, spec.dice_count)),
        (spec.keep_lowest <= spec.dice_count, KEEP_LOW,
         "Cannot keep the lowest {} of {} dice.".format(spec.keep_lowest, spec.dice_count)),
        (spec.reroll_threshold <= spec.dice_sides, REROLL,
         "Cannot reroll on {} or less with a d{}.".format(spec.reroll_threshold, spec.dice_sides)),
        (not spec.reroll_limit or spec.reroll_threshold > 0, LIMIT,
         "A reroll limit needs a reroll threshold above 0."),
        (spec.max_draws <= LIMIT_DRAWS, LIMIT,
         "Cannot draw more than {} times counting rerolls, lower the dice or lim.".format(
             LIMIT_DRAWS)),
    ]
    for passed, field, msg in checks:
        if not passed:
            raise rolldice.exc.OutOfRangeOption(msg, field=field, notation=notation)

    return spec

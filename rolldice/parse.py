"""
Everything related to parsing arguements from the command line.

Flags are case insensitive and may be mixed freely with the parts of the notation,
every positional part is concatenated into the notation.
"""
import argparse
import logging
from argparse import RawDescriptionHelpFormatter as RawHelp

import rolldice.exc

HELP = """Roll dice from a compact notation.

$ roll "[dice]" <flags>
   Dice: [n]d[m](options)
      [n]: The quantity of dice to roll
      [m]: The sidedness of the dice to roll
      Options:
         kh[n]    keep the highest [n] results
         kl[n]    keep the lowest [n] results
         rr[n]    reroll when the result is less than or equal to [n]
         lim[n]   limit the number of reroll attempts per die to [n]
      Flags:
         -a, --advantage      make a roll with advantage (same as kh1)
         -d, --disadvantage   make a roll with disadvantage (same as kl1)
         -l, --last           only show the last reroll result
         -h, --hide           only show the kept results
         -t, --total          also show the sum of the rolls
         -q, --quiet          do not show the parsed roll fields
         --seed [n]           seed the dice to replay a roll
         --help               show this message
      Examples:
         roll "4 d6 kh3"
         roll "2d6 rr2 lim1" --last
"""


class ThrowArggumentParser(argparse.ArgumentParser):
    """
    ArgumentParser subclass that does NOT terminate the program.
    """
    def print_help(self, file=None):  # pylint: disable=redefined-builtin
        formatter = self._get_formatter()
        formatter.add_text(self.description)
        raise rolldice.exc.ArgumentHelpError(formatter.format_help())

    def error(self, message):
        raise rolldice.exc.ArgumentParseError(message)

    def exit(self, status=0, message=None):
        """
        Suppress default exit behaviour.
        """
        raise rolldice.exc.ArgumentParseError(message)


def make_parser():
    """
    Returns the roll parser.
    Default help is disabled, -h means hide.
    """
    parser = ThrowArggumentParser(prog='roll', description=HELP, formatter_class=RawHelp,
                                  add_help=False)
    parser.add_argument('spec', nargs='*', help='The parts of the dice notation.')
    parser.add_argument('-a', '--advantage', action='store_true', help='Keep the highest roll.')
    parser.add_argument('-d', '--disadvantage', action='store_true', help='Keep the lowest roll.')
    parser.add_argument('-l', '--last', action='store_true', help='Only show the last reroll.')
    parser.add_argument('-h', '--hide', action='store_true', help='Only show the kept results.')
    parser.add_argument('-t', '--total', action='store_true', help='Show the sum of the rolls.')
    parser.add_argument('-q', '--quiet', action='store_true', help='Do not show parsed fields.')
    parser.add_argument('--seed', type=int, help='Seed for the dice.')
    parser.add_argument('--help', action='help', help='Show the help message.')

    return parser


def normalize_args(argv):
    """ Flags are case insensitive, lower case anything that looks like one. """
    return [arg.lower() if arg.startswith('-') else arg for arg in argv]


def is_known_flag(parser, arg):
    """
    True if the parser would accept arg as one of its options.
    Handles --flag=value, unique prefixes of long flags and grouped short flags like -at.
    """
    options = parser._option_string_actions  # pylint: disable=protected-access
    flag = arg.split('=', 1)[0]
    if flag in options:
        return True
    if flag.startswith('--'):
        return any(opt.startswith(flag) for opt in options)

    return len(flag) > 1 and all('-' + char in options for char in flag[1:])


def split_unknown_flags(parser, argv):
    """
    Separate the flags the parser does not know from the rest.
    They must be removed before parsing, otherwise argparse takes the
    notation parts that follow an unknown flag as its values.

    Returns:
        (kept, unknown): Both lists keep the original order.
    """
    kept, unknown = [], []
    for arg in argv:
        if arg.startswith('-') and not is_known_flag(parser, arg):
            unknown += [arg]
        else:
            kept += [arg]

    return kept, unknown


def parse_roll_args(parser, argv):
    """
    Parse the command line, unknown flags are logged and ignored.

    Raises:
        ArgumentParseError: A known flag was used incorrectly.
        ArgumentHelpError: The user asked for help.

    Returns:
        An argparse.Namespace, the complete notation text is in args.notation.
    """
    kept, unknown = split_unknown_flags(parser, normalize_args(argv))
    args, leftover = parser.parse_known_intermixed_args(kept)
    unknown += leftover
    if unknown:
        logging.getLogger('rolldice.parse').warning('Ignoring unknown arguments: %s', unknown)
    args.notation = ''.join(args.spec)

    return args

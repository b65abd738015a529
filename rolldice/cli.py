"""
The roll command. Everything is started upon main() execution. To invoke from root:
    python -m rolldice.cli "4d6kh3" --total

Flow of a single invocation:
    Parse the command line, parse the notation, roll, print the report.
    Any invalid notation prints the reason and the help, nothing is rolled.
"""
import logging
import sys

import rolldice.exc
import rolldice.notation
import rolldice.parse
import rolldice.present
import rolldice.roll
import rolldice.util


def show_help(parser, reason=None):
    """ Print the reason for failure, if any, then the full help. """
    if reason:
        print('Error: {}'.format(reason))
    try:
        parser.print_help()
    except rolldice.exc.ArgumentHelpError as exc:
        print(exc)


def run(argv):
    """
    Execute a single roll invocation and print the results.

    Raises:
        InternalException: Something went wrong that the user cannot fix.

    Returns:
        The exit code for the process.
    """
    log = logging.getLogger('rolldice.cli')
    parser = rolldice.parse.make_parser()
    try:
        args = rolldice.parse.parse_roll_args(parser, argv)
    except rolldice.exc.ArgumentHelpError as exc:
        print(exc)
        return 0
    except rolldice.exc.ArgumentParseError as exc:
        exc.log_level = 'warning'
        rolldice.exc.write_log(exc, log, content='', args=argv)
        show_help(parser, str(exc))
        return 2

    try:
        spec = rolldice.notation.parse_notation(args.notation)
    except rolldice.exc.InvalidNotation as exc:
        rolldice.exc.write_log(exc, log, content=args.notation, args=argv)
        show_help(parser, str(exc))
        return 0

    flags = rolldice.present.RollFlags.from_args(args)
    seed = args.seed if args.seed is not None else rolldice.util.get_config('seed')
    seed, rng = rolldice.util.new_rng(seed)
    log.info('Rolling %s with seed %d, flags %r', spec, seed, flags)

    try:
        result = rolldice.roll.RollEngine(rng).roll(spec)
    except rolldice.exc.InternalException as exc:
        rolldice.exc.write_log(exc, log, content=args.notation, args=argv)
        raise
    log.info('Rolled %s with %d rerolls: %s', spec, result.rerolls, result.finals)

    if not args.quiet:
        print(rolldice.present.format_debug(spec, flags))
    print(rolldice.present.format_result(result, flags))

    return 0


def main(argv=None):  # pragma: no cover
    """ Entry here! """
    rolldice.util.init_logging()
    return run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

"""Argument parsing functionality for cargo when / cargo unless."""

import argparse

from constants import Constants, Verbs

AFTER_HELP = (
    "To specify a set of multiple possible matches for an option, separate the "
    "values by a comma and no spaces. At least one match option is required. If "
    "multiple match options are present, each option specifies an additional "
    "match requirement for any of the set of possible values for that option."
)

_ABOUT = {
    Verbs.WHEN: (
        "Runs subsequent cargo command only when the specified options match "
        "the current rustc version and environment."
    ),
    Verbs.UNLESS: (
        "Runs subsequent cargo command except when the specified options match "
        "the current rustc version and environment. This is the negation of "
        "'cargo when'."
    ),
}


def _add_match_options(parser):
    """Add the match options and ambient flags shared by both verbs."""
    matches = parser.add_argument_group("match options")
    matches.add_argument("-c", "--channel",
                         dest="CHANNEL",
                         help="Matches rustc release channel(s): " + ", ".join(Constants.CHANNELS),
                         action="append", type=str,
                         metavar="CHANNEL[,CHANNEL...]")
    matches.add_argument("-v", "--version",
                         dest="VERSION",
                         help="Matches rustc version(s) using same rules and version syntax as Cargo",
                         action="append", type=str,
                         metavar="REQ[,REQ...]")
    matches.add_argument("-x", "--exists",
                         dest="EXISTS",
                         help="Matches if environment variable(s) are set, to any value",
                         action="append", type=str,
                         metavar="NAME[,NAME...]")
    matches.add_argument("-e", "--equals",
                         dest="EQUALS",
                         help="Matches if environment variable(s) are set to exactly the given value",
                         action="append", type=str,
                         metavar="NAME=VALUE[,NAME=VALUE...]")

    parser.add_argument("--config",
                        dest="CONFIG",
                        help="Path to a YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("CARGO_COMMAND",
                        help="Cargo subcommand to run, followed by its options",
                        nargs=argparse.REMAINDER)


def build_parser():
    """Build the top-level parser with one subparser per verb."""
    parser = argparse.ArgumentParser(
        prog="cargo",
        description="Runs other cargo commands conditionally upon rustc version and environment.",
    )
    parser.add_argument("-V", "--version",
                        action="version",
                        version=f"cargo-when {Constants.VERSION}")

    subparsers = parser.add_subparsers(dest="verb", metavar="{when,unless}")
    subparsers.required = True
    for verb in Verbs:
        sub = subparsers.add_parser(
            verb.value,
            usage=f"cargo {verb.value} [OPTIONS] <CARGO SUBCOMMAND> [SUBCOMMAND OPTIONS]",
            description=_ABOUT[verb],
            help=_ABOUT[verb],
            epilog=AFTER_HELP,
        )
        _add_match_options(sub)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)


def subcommand_usage(verb):
    """Usage line of a verb's subparser, printed when no cargo command is given."""
    parser = build_parser()
    for action in parser._actions:  # pylint: disable=protected-access
        if isinstance(action, argparse._SubParsersAction):  # pylint: disable=protected-access
            return action.choices[verb.value].format_usage()
    return parser.format_usage()

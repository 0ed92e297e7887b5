"""cargo when / cargo unless - run cargo subcommands conditionally.

Checks the active rustc channel and version, and the process environment,
against the match options and forwards the remaining arguments to cargo
when the predicate holds (``when``) or does not hold (``unless``).
"""
import logging
import os
import sys

from args import parse_args, subcommand_usage
from cli_config import ConfigError, resolve_settings
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes, Verbs
from dispatch import normalize_command, run_cargo
from matching.errors import EmptyPredicateError, SpecSyntaxError
from matching.evaluator import Environment, verdict
from matching.spec import parse_match_spec
from toolchain import ToolchainError, get_rustc_info

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL or Constants.DEFAULT_LOG_LEVEL)

    try:
        settings = resolve_settings(args)
    except ConfigError as e:
        logger.error("%s", e)
        return ExitCodes.CONFIG_ERROR.value
    configure_logging(settings.log_level)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)

    verb = Verbs(args.verb)
    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=verb.value),
        )

    try:
        spec = parse_match_spec(args.CHANNEL, args.VERSION, args.EXISTS, args.EQUALS)
    except (SpecSyntaxError, EmptyPredicateError) as e:
        logger.error("%s", e)
        return ExitCodes.USAGE_ERROR.value

    try:
        rustc_info = get_rustc_info(settings.rustc)
    except ToolchainError as e:
        logger.error("%s", e)
        return ExitCodes.TOOLCHAIN_ERROR.value

    env = Environment(channel=rustc_info.channel, version=rustc_info.version, variables=os.environ)
    if not verdict(verb, spec, env):
        logger.info("Conditions not met for 'cargo %s', skipping", verb.value)
        return ExitCodes.SUCCESS.value

    command = normalize_command(args.CARGO_COMMAND)
    if not command:
        sys.stdout.write(subcommand_usage(verb))
        return ExitCodes.NO_SUBCOMMAND.value
    return run_cargo(command, settings.cargo)


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()

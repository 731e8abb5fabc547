"""Command-line entry point for the calculator. Evaluates one expression given as an argument, or starts the interactive
shell. Uses the error handling context manager, so errors are reported rather than raised. Called from the calc
console script.
"""

import argparse
import logging
import sys

from calculator.calc import calculate
from calculator.lang.error import ErrorHandler
from calculator.lang.shell import Shell

LEVELS = ("ERROR", "INFO", "DEBUG")


def make_parser():
    """Logging levels are flags such as -DEBUG, and may appear before or after the expression."""
    parser = argparse.ArgumentParser(prog="calc", description="Evaluates a prefix-notation integer expression, ex: "
                                                              "let(aVar,sub(134,58),div(aVar,3))")
    parser.add_argument("expressions", help="expression to evaluate (if empty, see --interactive)", nargs="*",
                        metavar="expression")
    parser.add_argument("-i", "--interactive", help="start the interactive shell", action="store_true")
    for level in LEVELS:
        parser.add_argument(f"-{level}", help=f"set logging level to {level}", dest="levels", action="append_const",
                            const=level)
    return parser


def configure_logging(levels):
    """Configures root logger from the level flags given. The first one wins; extras are ignored."""
    level = levels[0] if levels else "ERROR"
    logging.basicConfig(stream=sys.stdout, format="%(levelname)s: %(message)s", level=getattr(logging, level),
                        force=True)

    logger = logging.getLogger("calculator")
    if levels:
        logger.info("Setting logging level to %s", level)
    for extra in levels[1:]:
        logger.info("Too many logging levels specified. Ignoring -%s", extra)
    return logger


def main(argv=None):
    """Runs calculator. Called from calc console script."""
    with ErrorHandler() as error_handler:
        args = make_parser().parse_intermixed_args(argv)
        logger = configure_logging(args.levels or [])
        logger.debug("Number of arguments passed: %d", len(sys.argv[1:] if argv is None else argv))

        if len(args.expressions) > 1:
            logger.error("Too many expressions specified. %s is extra.", args.expressions[1])

        elif args.interactive:
            Shell(error_handler, logger).cmdloop()

        elif not args.expressions:
            logger.info("No expression to evaluate.")

        else:
            expr, = args.expressions
            logger.info("Evaluating expression: %s", expr)

            result = calculate(expr, logger)
            if result.ok:
                print(f"Expression evaluates to {result.value}")
            else:
                error_handler.throw(result.error)


if __name__ == "__main__":
    main()

# smart_tremolo/cli/base_cmd.py

"""
Base setup for CLI commands: configuration loading and logging initialization.
"""

import logging
import sys
from pathlib import Path

import click

from smart_tremolo.config import load_configuration
from smart_tremolo.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


class ConfigGroup(click.Group):
    """
    A Click Group that loads configuration and sets up logging before invoking
    the group or its subcommands. The config is passed via ctx.obj['config'].
    Errors during setup are reported and exit with code 1; errors raised by
    the commands themselves propagate to Click.
    """
    def invoke(self, ctx: click.Context):
        if ctx.obj is None:
            ctx.obj = {}

        if 'config' not in ctx.obj:
            try:
                config_files = [Path(p) for p in ctx.params.get('config_files') or ()]
                config = load_configuration(config_files=config_files)
                ctx.obj['config'] = config

                verbosity = 0
                if ctx.params.get('quiet', False):
                    verbosity = -1
                elif ctx.params.get('verbose', 0) > 0:
                    verbosity = ctx.params['verbose']
                setup_logging(config, verbosity)
                logger.debug("Configuration and logging setup complete.")
            except Exception as e:
                error_logger = logging.getLogger("smart_tremolo.error")
                error_logger.critical(f"Critical error during CLI setup: {e!r}", exc_info=True)
                print(f"CRITICAL SETUP ERROR: {e!r}", file=sys.stderr)
                ctx.exit(1)
        else:
            logger.debug("Configuration already loaded in context.")

        return super().invoke(ctx)


# --- Common CLI Options ---
verbose_option = click.option(
    '-v', '--verbose',
    count=True,
    help="Increase verbosity level (-v for INFO, -vv for DEBUG)."
)
quiet_option = click.option(
    '-q', '--quiet',
    is_flag=True,
    default=False,
    help="Suppress all console output except critical errors."
)
config_option = click.option(
    '-c', '--config', 'config_files',
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Additional TOML config file(s). May be given more than once."
)

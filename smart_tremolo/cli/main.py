# smart_tremolo/cli/main.py

"""
Main entry point for the SmartTremolo CLI application.
Uses Click for command-line interface handling.
"""

import logging

import click

from smart_tremolo.version import __version__
from smart_tremolo.core.lfo import LFOShape
from .base_cmd import ConfigGroup, config_option, verbose_option, quiet_option
from .process_cmd import process_cmd

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.group(context_settings=CONTEXT_SETTINGS, cls=ConfigGroup)
@click.version_option(__version__, '-V', '--version', package_name='smart-tremolo', prog_name='smart-tremolo')
@verbose_option
@quiet_option
@config_option
@click.pass_context
def main_cli(ctx, verbose: int, quiet: bool, config_files):
    """
    SmartTremolo: LFO tremolo with smoothed parameters and adaptive control.

    Configuration is loaded from:
    Defaults -> ./smart_tremolo.toml -> ~/.config/smart_tremolo/smart_tremolo.toml -> Env Vars

    Use -v for verbose output, -vv for debug output, -q for quiet mode.
    """
    logger.debug("SmartTremolo CLI group invoked.")


@main_cli.command("shapes")
def shapes_cmd():
    """List the available LFO shapes."""
    for shape in LFOShape:
        click.echo(shape.value)


main_cli.add_command(process_cmd)

cli = main_cli

if __name__ == "__main__":
    cli()

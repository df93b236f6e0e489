#!/usr/bin/env python3
"""
specinfer CLI

Builds check programs from problem descriptions.

Usage:
    specinfer --help
    specinfer build problem.yaml
    specinfer -c config.yaml build problem.yaml -o checks.vpr --context-out context.json
"""

import click
import json
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .checks.builder import CheckBuilder
from .errors import CheckBuildError, ProblemFormatError
from .problem import load_problem
from .utils.config import Config, load_config
from .utils.logging import setup_logger

import logging

logger = logging.getLogger(__name__)


def print_success(message: str):
    """Print success message."""
    click.echo(click.style("SUCCESS: ", fg="green") + message, err=True)


def print_error(message: str):
    """Print error message."""
    click.echo(click.style("ERROR: ", fg="red") + message, err=True)


# ============================================================================
# Main CLI Group
# ============================================================================
@click.group()
@click.version_option(version=__version__, prog_name="specinfer")
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True),
              default=None, help='YAML configuration file')
@click.pass_context
def cli(ctx, verbose: bool, config_path: Optional[str]):
    """
    specinfer: check programs for specification inference

    \b
    Quick Start:
      specinfer build problem.yaml                 # Print the check program
      specinfer build problem.yaml -o checks.vpr   # Write it to a file
    """
    config = load_config(config_path) if config_path else Config()
    if verbose:
        config.log_level = "DEBUG"

    setup_logger("specinfer", level=config.log_level, log_file=config.log_file)

    ctx.ensure_object(dict)
    ctx.obj['config'] = config


# ============================================================================
# Build Command
# ============================================================================
@cli.command()
@click.argument('problem_path', type=click.Path(exists=True))
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Write the program to this file instead of stdout')
@click.option('--context-out', type=click.Path(), default=None,
              help='Write the snapshot context as JSON')
@click.option('--branching/--no-branching', default=None,
              help='Record boolean snapshot values through branches')
@click.pass_context
def build(ctx, problem_path: str, output: Optional[str], context_out: Optional[str],
          branching: Optional[bool]):
    """Build the check program for a problem description."""
    config: Config = ctx.obj['config']
    if branching is not None:
        config.check.use_branching = branching

    try:
        problem = load_problem(problem_path)
        builder = CheckBuilder.from_config(problem.program, problem.inference(), config)
        program, context = builder.basic_check(problem.checks, problem.hypothesis)
    except (ProblemFormatError, CheckBuildError) as e:
        print_error(str(e))
        sys.exit(1)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(str(program))
        print_success(f"Program written to {output_path}")
    else:
        click.echo(str(program), nl=False)

    if context_out:
        context_path = Path(context_out)
        context_path.parent.mkdir(parents=True, exist_ok=True)
        with open(context_path, 'w') as f:
            json.dump(context.to_dict(), f, indent=2)
        logger.info(f"Context with {len(context)} snapshots written to {context_path}")


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == '__main__':
    main()

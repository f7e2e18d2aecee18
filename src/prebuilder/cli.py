import click
import logging
import traceback
import asyncio
import os

from .builder import Prebuilder
from .cache import clear_all
from .config import parse_tree_list
from .project import load_project
from .utils import setup_logger, parse_module_levels
from .exceptions import (
    PrebuildError,
    ConfigurationError,
    StorageError,
)
from . import __version__


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logger with debug and module-level configuration"""
    module_levels = parse_module_levels(log_levels) if log_levels else None
    setup_logger(debug=debug, module_levels=module_levels, log_file=log_file)


def _abort(message: str):
    logging.error(message)
    ctx = click.get_current_context()
    if ctx.obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


def handle_errors(func):
    """Decorator to handle common exceptions"""
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            _abort(f"Configuration error: {e}")
        except StorageError as e:
            _abort(f"Storage error: {e}")
        except PrebuildError as e:
            _abort(f"An unexpected application error occurred: {e}")
        except FileNotFoundError as e:
            _abort(f"A required file was not found: {e}")
        except Exception as e:
            _abort(f"An unexpected error occurred: {e}")
    return wrapper


@handle_errors
def do_build(project_dir: str, trees: str):
    """Execute build command"""
    tree_types = parse_tree_list(trees) if trees else None
    if tree_types:
        logging.info(f"Building tree types {', '.join(tree_types)}")
    builder = Prebuilder.from_path(os.path.abspath(project_dir), trees=tree_types)
    outputs = builder.run()
    for tree_type, path in outputs.items():
        click.echo(f"{tree_type}: {path}")


@handle_errors
def do_clear(project_dir: str, addons: str):
    """Execute clear command"""
    project = load_project(os.path.abspath(project_dir))
    results = asyncio.run(clear_all(project, addons))
    removed = sum(1 for result in results if result.existed)
    logging.info(f"Cleared {removed} of {len(results)} prebuilt directories")


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'cache=DEBUG,clear=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='prebuild')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """Prebuild - Reuse and store prebuilt addon trees

    \b
    Examples:
      prebuild build --trees addon,templates    Prebuild the addon's trees
      prebuild clear -a 'my-addon*'             Clear prebuilt trees of matching addons
    """
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    setup_logging(debug, log_levels, log_file)


@cli.command()
@click.argument('project_dir', required=False, default='.', type=click.Path(file_okay=False))
@click.option('-t', '--trees', default='', help="Comma separated tree names to prebuild (e.g., 'addon,templates')")
@click.pass_context
def build(ctx, project_dir, trees):
    """Prebuild the trees of the project's own addon

    A tree with a matching prebuilt copy is reused, any other eligible tree is
    stored for later builds. A usage summary is written to prebuild.log.
    """
    do_build(project_dir, trees)


@cli.command()
@click.argument('project_dir', required=False, default='.', type=click.Path(file_okay=False))
@click.option('-a', '--addons', help='Addon name glob pattern for which prebuilt directories should be cleared. By default clears all')
@click.pass_context
def clear(ctx, project_dir, addons):
    """Clear prebuilt addons

    \b
    Examples:
      prebuild clear                 Clear every prebuilt addon of the project
      prebuild clear -a 'ember-*'    Clear addons matching the pattern
    """
    do_clear(project_dir, addons)


cli.add_command(clear, name='clear-prebuild')

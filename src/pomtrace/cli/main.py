"""
pomtrace CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import conflicts, origin, paths, tree


@click.group()
@click.version_option(package_name="pomtrace")
@click.option("-v", "--verbose", is_flag=True, help="Log resolution details to stderr")
@click.option("-c", "--config", "config_file", type=click.Path(dir_okay=False),
              default=None, help="Path to pomtrace.toml (default: ./pomtrace.toml)")
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_file: str | None):
    """pomtrace: Maven dependency tree and version-origin explorer.

    Reads a saved `mvn dependency:tree -Dverbose` report and explains
    where each dependency's version comes from in the POM hierarchy.

    \b
    Quick Start:
      mvn dependency:tree -Dverbose > tree.txt
      pomtrace conflicts tree.txt
      pomtrace paths tree.txt jackson-databind
      pomtrace origin tree.txt jackson-databind --pom pom.xml
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file


# Register commands
main.add_command(tree.tree)
main.add_command(conflicts.conflicts)
main.add_command(paths.paths)
main.add_command(origin.origin)

if __name__ == "__main__":
    main()

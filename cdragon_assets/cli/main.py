"""Entry point of the ``cdragon-assets`` command line."""

import importlib
import logging

import click

# command name -> (module, attribute); modules are imported on first use
_COMMANDS = {
    "crawl": ("cdragon_assets.cli.crawl", "crawl"),
    "publish": ("cdragon_assets.cli.crawl", "publish"),
    "status": ("cdragon_assets.cli.crawl", "status"),
}


class LazyGroup(click.Group):
    """Group resolving its subcommands from ``_COMMANDS`` on demand.

    ``cdragon-assets --help`` and ``status`` never import the HTTP client.
    """

    def list_commands(self, ctx):
        return sorted(_COMMANDS)

    def get_command(self, ctx, name):
        if name not in _COMMANDS:
            return None
        module_path, attr = _COMMANDS[name]
        return getattr(importlib.import_module(module_path), attr)


@click.command(cls=LazyGroup)
@click.version_option(package_name="cdragon-assets", prog_name="cdragon-assets")
@click.option("-v", "--verbose", is_flag=True, help="Log at DEBUG level")
def main(verbose: bool):
    """Crawl CommunityDragon game data into a static JSON tree."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )


if __name__ == "__main__":
    main()

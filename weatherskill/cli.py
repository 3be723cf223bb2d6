import asyncio
import inspect
from importlib import import_module
from pathlib import Path

import click

from .utils import configure_logging

configure_logging()


class AsyncAwareContext(click.Context):
    """
    A click context that invokes async functions with asyncio.run.
    """

    def invoke(self, *args, **kwargs):
        r = super().invoke(*args, **kwargs)
        if inspect.isawaitable(r):
            return asyncio.run(r)
        else:
            return r


click.Command.context_class = AsyncAwareContext


@click.group()
def cli() -> None:
    pass


def load_apps(path: Path) -> None:
    for cli_module in path.glob("*/cli.py"):

        # Construct the name of the module
        relative_path = cli_module.relative_to(Path(__file__).parent)
        module_path = ".".join(p.name for p in reversed(relative_path.parents))
        module_name = f"{module_path}.{cli_module.stem}"

        # Register the module
        module = import_module(module_name, package="weatherskill")
        if command := getattr(module, "cli", None):
            cli.add_command(command)


load_apps(Path(__file__).parent)

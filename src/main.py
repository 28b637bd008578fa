"""Main entry point for the terminal task list.

Picks one storage backend at startup and hands it to the menu loop.
"""
import logging
from pathlib import Path

import click

import theme
from cli import CLI
from storage import DEFAULT_TASKS_FILE, FileStore, InMemoryStore, TaskStore

BACKENDS = ('memory', 'file')


def build_store(backend: str, path: Path = DEFAULT_TASKS_FILE) -> TaskStore:
    if backend == 'memory':
        return InMemoryStore()
    if backend == 'file':
        return FileStore(path)
    raise ValueError(f"Unknown backend: {backend}")


@click.command()
@click.option('--backend', type=click.Choice(BACKENDS), default='memory', show_default=True,
              envvar='TASKS_BACKEND', help="Where tasks are kept.")
@click.option('--file', 'path', type=click.Path(dir_okay=False, path_type=Path),
              default=DEFAULT_TASKS_FILE, envvar='TASKS_FILE',
              help="Task file used by the file backend.")
@click.option('-v', '--verbose', is_flag=True, help="Log debug output to stderr.")
@click.option('--no-color', is_flag=True, help="Disable ANSI colors.")
def main(backend: str, path: Path, verbose: bool, no_color: bool) -> None:
    """Run the interactive task menu."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if no_color:
        theme.disable()
    store = build_store(backend, path)
    logging.getLogger(__name__).debug("Using %s backend", backend)
    CLI(store).run()

if __name__ == "__main__":
    main()

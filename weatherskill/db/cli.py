import click

from .migrations import migrate_db


@click.group(name="db", help="Database related commands")
def cli() -> None:
    pass


@cli.command(help="Apply missing migrations to the database")
async def migrate() -> None:
    click.echo("Migrating the database")
    applied = await migrate_db()
    for name in applied:
        click.echo(f"  Applied {name}")
    click.echo(f"Done, {len(applied)} migration(s) applied")

# school_elections/cli.py
# Out-of-band setup commands: flask --app school_elections <command>

import csv
import os

import click
from flask import current_app
from flask.cli import with_appcontext

from school_elections import db
from school_elections.database.models import Voter
from school_elections.importer import import_voters
from school_elections.seed import seed_demo


@click.command('init-db')
@with_appcontext
@click.option('--no-demo', is_flag=True, help='Only create tables, admin code and stations.')
def init_db_command(no_demo):
    """Create the tables and load the demo election."""
    seed_demo(current_app.config['ADMIN_CODE'], with_demo=not no_demo)
    click.echo("DB inicializada con datos de ejemplo.")


@click.command('import-voters')
@with_appcontext
@click.argument('csv_path', type=click.Path(dir_okay=False))
def import_voters_command(csv_path):
    """Add voters from a dni,name,course CSV, each with a new PIN."""
    if not os.path.exists(csv_path):
        raise click.ClickException(f"No existe CSV en: {csv_path}")
    report = import_voters(csv_path)
    click.echo(f"Importados {report.imported} votantes ({report.skipped} ya existían)")
    if report.invalid:
        click.echo(f"Líneas inválidas: {', '.join(map(str, report.invalid))}", err=True)


@click.command('export-pins')
@with_appcontext
@click.argument('out_path', type=click.Path(dir_okay=False, writable=True))
def export_pins_command(out_path):
    """Write the current PIN of every unblocked voter for distribution."""
    voters = (
        db.session.query(Voter)
        .filter(Voter.is_blocked.is_(False))
        .order_by(Voter.course, Voter.dni)
        .all()
    )
    with open(out_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(['dni', 'name', 'course', 'otp'])
        for voter in voters:
            writer.writerow([voter.dni, voter.name, voter.course, voter.otp])
    click.echo(f"{len(voters)} PINs escritos en {out_path}")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(import_voters_command)
    app.cli.add_command(export_pins_command)

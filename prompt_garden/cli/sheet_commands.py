import json

import click

from prompt_garden.services import prompt_service, setup_service


def init_sheet_commands(app):
    """Register spreadsheet maintenance commands on the given app."""

    @app.cli.command('init-sheets')
    def init_sheets():
        """Create the Prompts/Tags/Categories sheets and header rows."""
        with app.app_context():
            res = setup_service.initialize_sheets()
        click.echo(json.dumps(res, indent=2))

    @app.cli.command('recount-tags')
    def recount_tags():
        """Rebuild the Tags sheet from the current prompts."""
        with app.app_context():
            prompts = prompt_service.refresh_indexes()
        click.echo(f'Recounted tags over {len(prompts)} prompts.')

    @app.cli.command('compact-prompts')
    @click.confirmation_option(prompt='This rewrites every row of the Prompts sheet. Continue?')
    def compact_prompts():
        """Remove the blank rows deleted prompts leave in the Prompts sheet."""
        with app.app_context():
            count = prompt_service.compact_prompts()
        click.echo(f'Rewrote {count} prompts.')

import json

import click

from prompt_garden.seeds.seed_prompts import run as run_prompts


def init_seed_commands(app):
    """Register seed-related Flask CLI commands on the given app."""

    @app.cli.command('seed-prompts')
    @click.option('--prompts-dir', default=None, help='Directory containing .json/.md/.txt prompt files')
    @click.option('--init-sheets', is_flag=True, default=False, help='Create sheets and headers if missing')
    @click.option('--out-file', default=None, help='Optional path to write the seeded title->content mapping as JSON')
    def seed_prompts(prompts_dir, init_sheets, out_file):
        """Seed prompts from a directory or the packaged examples."""
        res = run_prompts(app=app, prompts_dir=prompts_dir, init_sheets=init_sheets)
        if out_file:
            with open(out_file, 'w', encoding='utf-8') as fh:
                json.dump(res['prompts'], fh, ensure_ascii=False, indent=2)
            click.echo(f'Wrote prompts mapping to: {out_file}')
        click.echo(f"created={res['created']} updated={res['updated']}")

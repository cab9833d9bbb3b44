import os

from prompt_garden import create_app
from prompt_garden.cli.seed_commands import init_seed_commands
from prompt_garden.cli.sheet_commands import init_sheet_commands
from prompt_garden.models.prompt import Prompt
from prompt_garden.models.tag import Tag
from prompt_garden.extensions import sheets

# Create the Flask app instance using the application factory
# It will load the config based on FLASK_CONFIG or default to 'development'
config_name = os.getenv('FLASK_CONFIG') or 'default'
app = create_app(config_name)


@app.shell_context_processor
def make_shell_context():
    """Provides a shell context for `flask shell` command."""
    return {'sheets': sheets.client, 'Prompt': Prompt, 'Tag': Tag}


init_sheet_commands(app)
init_seed_commands(app)

if __name__ == '__main__':
    # For production, use a proper WSGI server like Gunicorn or Waitress.
    print("API docs available at: http://127.0.0.1:5000/api/docs/")
    app.run(threaded=True)

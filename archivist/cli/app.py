"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .build import build_command
from .classify import classify_command
from .discover import discover_command
from .init import init_command
from .seed import seed_command

app = typer.Typer(
    name="archivist",
    help="Archivist - Byline discovery and shadow archive generator",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("discover")(discover_command)
app.command("build")(build_command)
app.command("seed")(seed_command)
app.command("classify")(classify_command)

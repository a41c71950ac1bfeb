"""Root CLI application for tizenbridge."""

import typer

from tizenbridge import __version__
from tizenbridge.cli import device, lifecycle

app = typer.Typer(
    name="tizenbridge",
    help="Push, install and run web apps on Tizen devices via sdb.",
    no_args_is_help=True,
)

# Register subcommands
app.add_typer(device.app, name="device", help="Push files and run scripts on the device")
app.add_typer(lifecycle.app, name="app", help="Install, uninstall, start, stop and debug the app")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tizenbridge {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """tizenbridge - Tizen device automation over sdb."""
    pass


if __name__ == "__main__":
    app()

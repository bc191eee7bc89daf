"""Main entry point for the debug console application."""

import logging
from typing import Optional, Tuple

import click
from dotenv import load_dotenv


def _configure_logging(debug: bool) -> None:
    """Send log records to the log file; the terminal belongs to the TUI."""
    from .core.config_paths import ConfigPaths

    logging.basicConfig(
        filename=ConfigPaths.get_log_file(),
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.command()
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode and debug logging'
)
@click.option(
    '--prompt',
    default=None,
    help='Prompt shown while the Python session is active'
)
@click.option(
    '--startup',
    multiple=True,
    help='Python line to run silently at startup (repeatable)'
)
def main(debug: bool, prompt: Optional[str], startup: Tuple[str, ...]) -> None:
    """Launch the debug console TUI with an embedded Python session."""
    import os
    import sys

    load_dotenv()

    if debug:
        os.environ['TEXTUAL_DEBUG'] = '1'
    _configure_logging(debug)

    try:
        from .app import DebugConsoleApp
        from .config.settings_manager import load_console_settings

        settings = load_console_settings()
        if prompt is not None:
            settings.prompt = prompt
        if startup:
            settings.startup = [*settings.startup, *startup]

        app = DebugConsoleApp(settings=settings)
        app.run()

    except KeyboardInterrupt:
        click.echo("\nExiting...")
        sys.exit(0)
    except Exception as e:
        if debug:
            raise
        else:
            click.echo(click.style(f"Error: {e}", fg='red'))
            sys.exit(1)


if __name__ == "__main__":
    main()

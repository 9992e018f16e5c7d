"""
PR Autograder: grades README answers on a GitHub pull request and posts a review

Usage:
  pr-autograder [--config=PATH] [--host=HOST] [--port=PORT]
  pr-autograder (-h | --help)
  pr-autograder --version

Options:
  --config=PATH  Path to YAML configuration file [default: config.yml].
  --host=HOST    Interface to listen on (overrides the config file).
  --port=PORT    Port to listen on (overrides the config file).
  -h --help      Show this screen.
  --version      Show version.
"""

import logging
import sys
from pathlib import Path

import uvicorn
from docopt import docopt
from pydantic import ValidationError

from pr_autograder import __version__
from pr_autograder.config import load_settings
from pr_autograder.main import configure_logging, create_app

logger = logging.getLogger("pr_autograder")


def main() -> int:
    arguments = docopt(__doc__, version=__version__)
    config_path = Path(arguments["--config"])

    try:
        settings = load_settings(
            config_path,
            host=arguments["--host"],
            port=arguments["--port"],
        )
    except (FileNotFoundError, ValueError, ValidationError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)
    app = create_app(settings)

    logger.info("Server started on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Notes Service: Command-Line Options
===================================

What:  The option shared by `notes-api` and `notes-migrate`.
How:   `--config-path` (also spelled `-config_path`) names the YAML config
       file and takes precedence over the CONFIG_PATH environment variable.
When:  Must run before notes_api.config is imported: the settings singleton
       is built at import time and reads CONFIG_PATH then.
"""

import argparse
import os
from typing import Optional, Sequence


def apply_config_path_arg(
    description: str, argv: Optional[Sequence[str]] = None
) -> argparse.Namespace:
    """Parse the command line and export --config-path as CONFIG_PATH."""
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--config-path",
        "-config_path",
        dest="config_path",
        help="YAML config file (default: $CONFIG_PATH, if set)",
    )
    args = parser.parse_args(argv)

    if args.config_path:
        os.environ["CONFIG_PATH"] = args.config_path
    return args

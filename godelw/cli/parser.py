"""
godelw command-line entry point.

Every argument is forwarded to the distribution binary, so the wrapper has
no options of its own. It is configured through the environment instead:

    GODEL_HOME          cache root (default: ~/.godel)
    GODELW_PROJECT_DIR  project directory (default: directory of the wrapper if it
                        holds godel/config, else the current directory)
    GODELW_LOG_LEVEL    DEBUG, INFO, WARNING or ERROR (default: INFO)
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from godelw.config.settings import load_settings
from godelw.core.directory import CacheLayout, get_cache_root
from godelw.core.exceptions import GodelwError
from godelw.core.platform import detect_platform
from godelw.distribution.installer import DistributionInstaller
from godelw.distribution.launcher import launch

logger = logging.getLogger(__name__)

PROJECT_DIR_ENV_VAR = "GODELW_PROJECT_DIR"
LOG_LEVEL_ENV_VAR = "GODELW_LOG_LEVEL"


@dataclass(frozen=True)
class WrapperContext:
    """Where the wrapper lives and what it is called."""

    script_home: Path
    wrapper_path: Path

    @property
    def config_dir(self) -> Path:
        return self.script_home / "godel" / "config"

    @property
    def properties_file(self) -> Path:
        return self.config_dir / "godel.properties"

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "godelw.yml"

    @classmethod
    def from_invocation(
        cls, argv0: str, environ: Optional[Mapping[str, str]] = None
    ) -> "WrapperContext":
        """
        Resolve the context from the program name the wrapper was run as.

        The project directory is GODELW_PROJECT_DIR if set, else the
        wrapper's own directory when it holds godel/config, else the
        current directory.
        """
        if environ is None:
            environ = os.environ

        invoked = Path(os.path.abspath(argv0))
        override = environ.get(PROJECT_DIR_ENV_VAR)
        if override:
            script_home = Path(os.path.abspath(override))
        elif (invoked.parent / "godel" / "config").is_dir():
            script_home = invoked.parent
        else:
            # Installed as a console script: run from the project directory
            script_home = Path.cwd()

        return cls(script_home=script_home, wrapper_path=invoked)


class CLI:
    """godelw command-line interface."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def run(self, args: Optional[Sequence[str]] = None, argv0: Optional[str] = None) -> int:
        """
        Install the distribution if needed and delegate to it.

        Args:
            args: Arguments to forward (default: sys.argv[1:])
            argv0: Program name the wrapper was invoked as (default: sys.argv[0])

        Returns:
            Exit code (0 = success, 1 = error); on POSIX a successful
            delegation replaces the process and never returns
        """
        if args is None:
            args = sys.argv[1:]
        if argv0 is None:
            argv0 = sys.argv[0]

        self._configure_logging()

        try:
            context = WrapperContext.from_invocation(argv0, self.environ)
            settings = load_settings(context.settings_file)
            platform_info = detect_platform(settings.checksums)
            layout = CacheLayout(get_cache_root(self.environ))

            installer = DistributionInstaller(
                settings, platform_info, layout, context.properties_file
            )
            binary = installer.ensure_installed()

            return launch(binary, platform_info, list(args), context.wrapper_path)

        except GodelwError as e:
            logger.error(str(e))
            return 1

    def _configure_logging(self):
        """Configure logging from GODELW_LOG_LEVEL."""
        level_name = self.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO

        if level <= logging.DEBUG:
            format_str = "%(levelname)s [%(name)s] %(message)s"
        else:
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()

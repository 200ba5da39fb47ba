"""Allow ``python -m machop_launcher``."""

from machop_launcher.cli import cli_main

if __name__ == "__main__":
    cli_main()

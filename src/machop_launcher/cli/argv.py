"""
Argv preprocessor for verbatim pass-through.

The launcher has no options of its own: every token belongs to the linker.
Typer would otherwise try to parse ``--help``, ``-o`` and friends, so the
caller's arguments are placed behind an end-of-options marker before Typer
sees them.
"""

END_OF_OPTIONS = "--"


def preprocess_argv(argv: list[str]) -> list[str]:
    """Shield caller arguments from Typer's option parsing.

    Only the leading marker is consumed by the parser, so a ``--`` the
    caller passes on to the linker survives unchanged.

    Examples:
        >>> preprocess_argv(["--version"])
        ['--', '--version']
        >>> preprocess_argv([])
        ['--']
    """
    return [END_OF_OPTIONS, *argv]

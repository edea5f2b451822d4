"""Module entrypoint for ``python -m filedeck``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and workspace setup happen in ``filedeck.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

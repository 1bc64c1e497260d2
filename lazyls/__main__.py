"""Module entrypoint for ``python -m lazyls``.

Argument parsing and exit handling happen in ``lazyls.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

"""Module entrypoint for ``python -m gridcopy``.

All argument parsing and export setup happen in ``gridcopy.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

"""Module entrypoint for ``python -m mdview``.

All argument parsing and runtime setup happen in ``mdview.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

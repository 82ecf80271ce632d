"""Module entrypoint for ``python -m capto``.

All argument parsing and output happen in ``capto.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

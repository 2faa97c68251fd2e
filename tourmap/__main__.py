"""Entry point for ``python -m tourmap``."""

from tourmap.cli import main

if __name__ == "__main__":
    main()

"""Entry point for ``python -m thriftbuild``."""

from .cli import main

if __name__ == "__main__":
    main()

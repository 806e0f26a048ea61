"""Entry point for ``python -m pyocl``."""

from pyocl.main import main

if __name__ == "__main__":
    raise SystemExit(main())

"""Main entry point for scriptengine CLI when run as a module."""

from scriptengine.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()

"""Main entry point for osf2txt when run as a module."""

from osftext.cli.main import main

if __name__ == "__main__":  # pragma: no cover
    main()

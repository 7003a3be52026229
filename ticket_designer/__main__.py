"""
Module entrypoint for `python -m ticket_designer`.

This allows running the tool as a module from the repository root:
    python -m ticket_designer generate project.json
"""
import sys

from ticket_designer.app import main

if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python
"""
Launcher script for Ticket Designer.

Usage from repo root:
    python run_ticket_designer.py parse script.cs -o project.json

Alternative:
    python -m ticket_designer
"""
import sys

from ticket_designer.app import main

if __name__ == "__main__":
    sys.exit(main())

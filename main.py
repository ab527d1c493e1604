#!/usr/bin/env python3
"""google-dorker main entry point.

Usage::

    python main.py search -d example.com --subs
    python main.py search -d example.com example.org --subs --format csv -o subs.csv
    python main.py version
    python main.py config
"""

from googledorker.cli import main

if __name__ == "__main__":
    main()

"""
Entry point for ``python -m meetingslots``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()

"""CLI for the package."""

from vpsearch import app

if __name__ == "__main__":
    app()

"""cfpromise CLI bootstrap."""

from cfpromise.cli import app

if __name__ == "__main__":
    app()

"""Allow `python -m routerpc`."""

from routerpc.cli.commands import app

if __name__ == "__main__":
    app()

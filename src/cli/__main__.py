"""Module entrypoint for the workspace-search CLI."""

from __future__ import annotations

from cli.app import app


def main() -> None:
    """Run the workspace-search CLI."""
    app.meta()


if __name__ == "__main__":
    main()

from cli._runner import run


def main() -> None:
    """Lint the app, cli and tests."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "check", "app", "cli", "tests"]))


def format() -> None:
    """Format the app, cli and tests."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "format", "app", "cli", "tests"]))

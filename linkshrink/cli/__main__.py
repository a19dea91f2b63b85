"""Module entry point for `python -m linkshrink.cli`."""

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    from linkshrink.cli import cli

    cli()

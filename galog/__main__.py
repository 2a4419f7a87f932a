"""Allow galog to be executable through `python -m galog`."""
from galog.cli import cli


if __name__ == "__main__":  # pragma: no cover
    cli(prog_name="galog")

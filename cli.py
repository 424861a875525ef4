# cli.py

"""
Run DocSweep from a source checkout without installing it:

    python cli.py --config configs/default.yaml sweep --dry-run --json reports/sweep.json
"""
from docsweep.cli import cli


if __name__ == '__main__':
    cli()

"""Package entry point.

Preferred invocation is via the installed console script:

    well-log-analyzer analyze data.csv

For convenience we also support:

    python -m well_log_analyzer ...
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m well_log_analyzer`."""

    app()


if __name__ == "__main__":
    main()

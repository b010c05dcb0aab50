"""Run the bay water quality report with ``python -m bay_wq``."""

from bay_wq.cli import main

main()

"""Allow ``python -m curr_table``."""

from curr_table.cli import main

main()

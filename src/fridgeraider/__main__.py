"""Allow ``python -m fridgeraider``."""

from fridgeraider.cli import main

main()

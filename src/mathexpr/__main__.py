"""Allow ``python -m mathexpr``."""

from mathexpr.cli import main

main()

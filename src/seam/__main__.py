"""Allow ``python -m seam``."""

from seam._cli import main

main()

"""Allow ``python -m intellicomp``."""

from intellicomp.app import main

main()

"""Allow ``python -m libhunt_admin``."""

from libhunt_admin.cli import main


main()

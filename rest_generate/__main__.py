"""Allow ``python -m rest_generate``."""

from rest_generate.cli import main

if __name__ == "__main__":
    main()

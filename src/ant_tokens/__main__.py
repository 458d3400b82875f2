"""Allow ``python -m ant_tokens``."""

from ant_tokens.cli import main

if __name__ == "__main__":
    main()

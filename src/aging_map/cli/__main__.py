"""Allow ``python -m aging_map.cli``."""

from aging_map.cli.main import main

if __name__ == "__main__":
    main()

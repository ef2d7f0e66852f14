"""Entry point for running hustle as a module.

Usage:
    python -m hustle [SCORE]
"""

from hustle.app import main

if __name__ == "__main__":
    main()

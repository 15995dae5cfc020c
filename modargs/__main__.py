"""Package entry point for ``python -m modargs``.

WHY: Users check an argument string from the terminal with
``python -m modargs "rate=48000 format=s16le" --sample-spec``.

HOW: Delegates to the CLI's main() function.
"""

from modargs.cli import main

if __name__ == "__main__":
    main()

"""Package entry point for ``python -m modelinks``.

WHY: Python's ``-m`` flag looks for ``__main__.py`` inside the package
and executes it; this delegates to the CLI's main() function.
"""

from modelinks.cli import main

if __name__ == "__main__":
    main()

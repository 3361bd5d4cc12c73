"""Package entry point for ``python -m catala_weaver``.

WHY: Users run the weaver as ``python -m catala_weaver items.json`` when
the ``catala-weave`` console script is not on PATH.

HOW: Delegates to the CLI's main() function.
"""

from catala_weaver.cli import main

if __name__ == "__main__":
    main()

"""Entry point wrapper for ``python -m bassline_walk``.

Execution is forwarded to :func:`bassline_walk.main` so ``python -m`` and the
installed ``bassline-walk`` console script behave identically.

Example
-------
::

    python -m bassline_walk --chords C7,F7,G7,C7 --notes 4 --output walk.mid
"""

from . import main

if __name__ == "__main__":
    main()

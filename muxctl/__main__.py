"""Allow ``python -m muxctl`` to run the diagnostic."""

from muxctl.diagnostic import main

if __name__ == "__main__":
    raise SystemExit(main())

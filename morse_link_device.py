"""Run the Morse trainer from a source checkout."""

from __future__ import annotations

from morse_link.app import main

if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()

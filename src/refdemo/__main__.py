from __future__ import annotations

from signal import SIGINT, signal

from refdemo.ui.cli import main, sigint_handler

if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()

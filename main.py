#!/usr/bin/env python3
"""
Run the global news bot without installing the package.
Same flags as the installed `global-news-bot` command:
  python main.py --mode once
  python main.py --mode serve --run-now
"""

import sys
from pathlib import Path

# Package lives in src/
_SRC = Path(__file__).resolve().parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


if __name__ == "__main__":
    from global_news_bot.cli import main

    sys.exit(main())

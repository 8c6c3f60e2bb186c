"""Allow: python -m global_news_bot --mode once"""

import sys

from global_news_bot.cli import main

sys.exit(main())

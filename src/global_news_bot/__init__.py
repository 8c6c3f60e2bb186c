"""
Global news bot – fetch world headlines, rank and diversify them by region,
turn the top stories into short vertical videos and publish them to TikTok.
"""

__version__ = "1.0.0"

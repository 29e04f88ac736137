"""
Blog-style sample application showcasing PostKeep capabilities.
"""

from .demo import bootstrap_app, fetch_recent_posts, run_demo, seed_sample_data

__all__ = [
    "bootstrap_app",
    "seed_sample_data",
    "fetch_recent_posts",
    "run_demo",
]

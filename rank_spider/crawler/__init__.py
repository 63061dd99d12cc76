# rank_spider/crawler/__init__.py
"""
Crawl core: links, frontier, controller and its default collaborators.
"""

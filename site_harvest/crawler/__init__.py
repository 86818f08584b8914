"""
site_harvest.crawler: fetching, extraction and the depth-first site traversal.
"""

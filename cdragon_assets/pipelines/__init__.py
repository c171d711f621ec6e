"""Crawl pipeline for CommunityDragon game data.

Stage 1: Version check - compares the upstream content version with the persisted marker
Stage 2: Crawl - fetches each locale's catalog, resolves relations and writes the JSON tree

The wiki skin table is scraped once per crawl and merged into every locale.
"""

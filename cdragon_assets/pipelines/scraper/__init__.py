"""Wiki scraper.

Extracts the Lua skin annotation table embedded in the League wiki's
``Module:SkinData/data`` page.
"""

"""Locale package for the bot's own reply texts.

This package contains JSON files (en.json, fr.json) read through
importlib.resources so they are found both in a checkout and when installed.
"""

"""src/valuewrap/utils/__init__.py"""

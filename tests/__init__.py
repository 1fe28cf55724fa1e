"""
codemap test suite.
"""

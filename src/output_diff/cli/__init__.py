"""
Command line interface for OutputDiff.
"""

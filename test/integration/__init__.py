"""
Integration tests for the compile driver.

These tests run whole compile jobs over temporary source trees on disk.

Test categories:
- Directory jobs: discovery, staleness checks and priority files
- Command line: the compile-driver command with real compile commands
"""

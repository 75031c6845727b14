"""Test suite for sparklr.

- unit/: one directory per package under sparklr.core, plus the CLI
- fixtures/assets/: sample effect files, valid and broken
"""

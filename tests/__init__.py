"""Test suite for the Keystone identity subsystem.

Test structure:
- unit/: Domain rules, application services and handlers against
  in-memory ports
- integration/: Infrastructure adapters with their real libraries
"""

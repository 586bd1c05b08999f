"""
Test Suite for the Actual Budget CLI

Test Structure:
- fixtures/: In-memory budget session and subprocess helpers
- unit/: Unit tests mirroring src/ package structure
- integration/: Dispatcher tests through the click entry point
- e2e/: Subprocess runs of the installed command

Test Data:
All test data is synthetic. No test talks to a real Actual Budget server.
"""

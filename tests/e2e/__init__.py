#!/usr/bin/env python3
"""
End-to-end tests for the actual_cli package.

These tests execute the CLI via subprocess and only exercise paths that
finish before any network activity.
"""

"""Test suite for the user API."""

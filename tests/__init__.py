"""Tests for convex-docs."""

"""Tests for the todolabels package."""

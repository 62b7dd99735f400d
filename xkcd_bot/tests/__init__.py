"""Unit tests for the xkcd bot"""

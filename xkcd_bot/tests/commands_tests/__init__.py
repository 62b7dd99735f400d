"""Unit tests for the command extensions"""

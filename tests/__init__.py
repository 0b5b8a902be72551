"""
Test suite for the theme_interpreter project.
"""

"""Command-line interface for linestyle"""

"""
Core Utilities - Shared Plumbing

Configuration, logging, time helpers and the retry executor used by every layer.
"""

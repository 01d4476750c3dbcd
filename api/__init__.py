"""
CodeScribe HTTP API
"""

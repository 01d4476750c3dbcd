"""Handwritten Code Workflows

Available workflows:
- codeify_drawing: saved drawing → indented code (optionally executed)

Usage:
    python -m workflows.codeify_drawing drawing.json --run
"""

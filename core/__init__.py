"""
CodeScribe core: handwritten code → indented, runnable code
"""

"""
The RemindBridge command-line interface.
"""

"""
Console commands
"""

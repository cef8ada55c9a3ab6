"""Read-only message history"""

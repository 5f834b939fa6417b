"""
Prompt Sync

Keeps a selected-tag list and its delimited prompt text in step with each other.
"""

"""
Core risk analysis pipeline.
"""

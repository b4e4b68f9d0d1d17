"""Infrastructure layer — JSON persistence and the workspace controller.

May import from domain and config. Never from services, commands, or output.
"""

"""
Command Handlers package.

This package contains individual command handlers for the demo bot:
- start_handler: Handles the /start command
- cancel_handler: Handles the /cancel command when nothing is pending
- survey_handler: Handles the /survey command by asking a list of questions
"""

"""
Command Line Interface Package

Command Structure:
- sparebank1-ynab sync: Fetch, derive and import transactions (supports --dry-run)
- sparebank1-ynab setup: OAuth login, budget/account mapping, env file generation
- sparebank1-ynab config / version: Utility commands
"""

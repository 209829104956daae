"""
Test Suite for the SpareBank1 → YNAB sync

Test Structure:
- fixtures/: Synthetic bank/YNAB data and fake HTTP sessions
- unit/: Unit tests mirroring the src/ package structure
- integration/: Pipeline and CLI tests over fake HTTP sessions

No test touches the network or a real YNAB budget.
"""

# fitclub/services/__init__.py
"""
Service layer for FitClub.

The three ledgers each own one family of conflict domains; ConstraintEngine
is the admission gate that callers use.
"""

"""
Paycheck Budget - Source Package

A small personal budgeting tracker that splits income into the
1st and 15th paychecks, subtracts what is owed, and shows what is left.

DESIGN PRINCIPLES:
1. One owned aggregate, persisted in full after every change
2. Invalid input never reaches storage
3. Totals are always recomputed, never stored
4. Every command is logged
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Paycheck Budget Team"

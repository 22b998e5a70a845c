"""
Inventory Costing Engine.

Recipe-to-inventory unit conversion, cost and stock deduction previews
for the restaurant back office, following Clean Architecture and
Domain-Driven Design principles.

Structure:
- domain/: Unit taxonomy, conversion factor tables, conversion engine
- application/: Costing calculators and CSV column mapping use cases
- infrastructure/: Environment configuration and logging setup
- scripts/: Command-line preview tools
- tests/: Test suite (unit)
"""

__version__ = "1.0.0"

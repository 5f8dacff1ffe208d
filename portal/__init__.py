"""
Campus Placement Portal
Listing eligibility, application tracking and placement reports.

Architecture:
- PostgreSQL: profiles, listings, applications (unique per student/listing)
- Eligibility evaluator: pure rule check of a profile against a listing
- Application ledger: guarded create and status updates
- Aggregation reporter: status counts and conversion rates for dashboards
"""

__version__ = "1.0.0"

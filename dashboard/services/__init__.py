"""Services Layer — the imperative shell around core/.

Invariants:
    - Services await store IO and hand the results to pure core functions
    - Every pipeline entry point takes its DashboardStore and ViewCache as arguments
    - Only the categories in the error taxonomy are caught; anything else propagates
"""

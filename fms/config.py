# fms/config.py

# Calendar
DAYS_PER_YEAR = 365

# Input bounds (inclusive)
MIN_DAYS = 1
MAX_MTTF_DAYS = 10000
MAX_REPAIR_DAYS = 10000
MAX_QUANTITY = 1000        # Machines per type
MAX_ADJUSTERS = 1000       # Technicians per group
MIN_YEARS = 1
MAX_YEARS = 1000

# Reporting
RECENT_EVENTS = 10         # Events shown after a run
REPORT_WIDTH = 60

# Scenario files
SCENARIO_DIR = "data/scenarios"

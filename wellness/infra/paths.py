from wellness.utilities.config import DATA_DIR, TEMPLATES_DIR

# Centralized file names for data files (single source of truth)
PLAN_FILE_NAME = 'daily-plans.json'
MONTHLY_PLAN_FILE_NAME = 'monthly-plans.json'

PLAN_FILE = DATA_DIR / PLAN_FILE_NAME
MONTHLY_PLAN_FILE = DATA_DIR / MONTHLY_PLAN_FILE_NAME

__all__ = ['DATA_DIR', 'TEMPLATES_DIR', 'PLAN_FILE_NAME', 'MONTHLY_PLAN_FILE_NAME', 'PLAN_FILE', 'MONTHLY_PLAN_FILE']

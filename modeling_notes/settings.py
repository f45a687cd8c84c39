"""App-wide settings: data location, defaults for fits and tests, logging."""
import os

PACKAGE_DIR = os.path.dirname(__file__)
DATA_PATH = os.path.join(PACKAGE_DIR, "data", "crickets.csv")

PAGE_LAYOUT = "wide"

# Significance level used when narrating p-values on every page
ALPHA = 0.05
CONF_LEVEL = 0.95

OUTCOME = "rate"
INTERACTION_FORMULA = "rate ~ temp * species"
MAIN_EFFECTS_FORMULA = "rate ~ temp + species"
GROUP_FORMULA = "rate ~ temp"

TEST_SIZE = 0.25
SEED = 42

LOG_LEVEL = os.environ.get("MODELING_NOTES_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.environ.get("MODELING_NOTES_LOG_FILE")

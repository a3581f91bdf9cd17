"""Deal sheet column names and default values."""

# Core identifiers
DEAL_ID = "deal_id"
DEAL_NAME = "deal_name"
BROKER_NAME = "broker_name"
STATUS = "status"
DEAL_VALUE = "deal_value"

# Optional scalars
CREATED_TIME = "created_time"
PROCESS_DAYS = "process_days"
LATEST_DATE = "latest_date"
NEW_LEAD = "new_lead"

KNOWN_FIELDS = (
    DEAL_ID,
    DEAL_NAME,
    BROKER_NAME,
    STATUS,
    DEAL_VALUE,
    CREATED_TIME,
    PROCESS_DAYS,
    LATEST_DATE,
    NEW_LEAD,
)

# Defaults applied to blank cells
DEFAULT_DEAL_NAME = "Unnamed Deal"
DEFAULT_BROKER_NAME = "Unknown"
DEFAULT_STATUS = "Unknown"
SYNTHETIC_ID_PREFIX = "DEAL"

# Pipeline stages, in order
PIPELINE_STAGES = (
    "Enquiry Leads",
    "Opportunity",
    "1. Application",
    "2. Assessment",
    "3. Approval",
    "4. Loan Document",
    "5. Settlement Queue",
    "6. Settled",
)

# Settlement tracking
SETTLEMENT_COLUMNS = ("2025 Settlement", "2024 Settlement")

# Lost deal tracking
LOST_DATE = "Lost date"
LOST_REASON = "lost reason"
LOST_AT_PROCESS = "which process (if lost)"
LOST_COLUMNS = (LOST_DATE, LOST_REASON, LOST_AT_PROCESS)

# Source channel flags
SOURCE_FLAG_COLUMNS = ("From Rednote?", "From LifeX?")

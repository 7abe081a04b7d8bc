"""
Dashboard threshold and vocabulary configuration.

These are load-time constants consumed by the KPI and scoring code:
- Threshold cutoffs that colour KPI tiles (green / yellow / red)
- Fixed histogram buckets for action aging and resolution velocity
- Canonical severity / priority / status ordering
- CSV column synonym table used during header normalization

To adjust thresholds, edit the values below.
"""

import math

# ============================================================================
# KPI thresholds
# ============================================================================

THRESHOLDS = {
    # SLA hit rate: share of actions meeting their deadline (higher is better)
    'slaHitRate': {
        'green': 0.90,   # >= 90% is green
        'yellow': 0.80,  # >= 80% is yellow, < 90%
    },
    # Critical cases open for more than 14 days (lower is better)
    'criticalBacklog14d': {
        'green': 2,
        'yellow': 5,
    },
    # Actions past deadline and not closed
    'overdueActions': {
        'green': 10,
        'yellow': 25,
    },
    # Critical severity cases still open
    'openCriticalCases': {
        'green': 10,
        'yellow': 30,
    },
}

# Per-site tolerance multipliers applied to the count thresholds above.
# Example: 'SITE001': 1.5 gives that site 50% more headroom.
SITE_THRESHOLD_MULTIPLIERS: dict[str, float] = {}

# Health score bands
HEALTH_SCORE_BANDS = {
    'green': 80,
    'yellow': 60,
}

# ============================================================================
# Date presets (days back from now)
# ============================================================================

DATE_PRESETS = {
    'last7': 7,
    'last30': 30,
    'last90': 90,
}

# ============================================================================
# Histogram buckets
# ============================================================================

# Inclusive on both ends, applied to whole-day ages of non-closed actions
ACTION_AGING_BUCKETS = [
    {'label': '0-7d', 'min': 0, 'max': 7},
    {'label': '8-14d', 'min': 8, 'max': 14},
    {'label': '15-30d', 'min': 15, 'max': 30},
    {'label': '31-60d', 'min': 31, 'max': 60},
    {'label': '60+d', 'min': 61, 'max': math.inf},
]

# Half-open [min, max), first match wins
RESOLUTION_VELOCITY_BUCKETS = [
    {'label': '0-1d', 'min': 0, 'max': 1},
    {'label': '1-3d', 'min': 1, 'max': 3},
    {'label': '3-7d', 'min': 3, 'max': 7},
    {'label': '7-14d', 'min': 7, 'max': 14},
    {'label': '14-30d', 'min': 14, 'max': 30},
    {'label': '30+d', 'min': 30, 'max': math.inf},
]

# Actions-per-case relationship buckets (last one is open ended)
ACTIONS_PER_CASE_BUCKETS = ['1', '2', '3', '4', '5+']

# ============================================================================
# Canonical ordering
# ============================================================================

SEVERITY_ORDER = {
    'Critical': 1,
    'High': 2,
    'Medium': 3,
    'Low': 4,
}

# Both priority notations share a rank
PRIORITY_ORDER = {
    'Critical': 1,
    'P1': 1,
    'High': 2,
    'P2': 2,
    'Medium': 3,
    'P3': 3,
    'Low': 4,
    'P4': 4,
}

STATUS_ORDER = {
    'Blocked': 1,
    'In Progress': 2,
    'Open': 3,
    'Closed': 4,
}

# ============================================================================
# Persisted state keys
# ============================================================================

STORAGE_KEYS = {
    'dashboardFilters': 'windFarmDashboard_filters',
    'lastDataLoad': 'windFarmDashboard_lastLoad',
}

# ============================================================================
# CSV column synonyms
# ============================================================================

# Keys are lower-cased, trimmed header spellings; values are canonical fields.
CSV_COLUMN_MAPPINGS = {
    # Identifiers
    'id': 'id',
    'action id': 'action_id',
    'action_id': 'action_id',
    'actionid': 'action_id',
    'case id': 'case_id',
    'case_id': 'case_id',
    'caseid': 'case_id',

    # Site
    'site id': 'site_id',
    'site_id': 'site_id',
    'siteid': 'site_id',
    'site name': 'site_name',
    'site_name': 'site_name',
    'sitename': 'site_name',
    'site': 'site_name',

    # Turbine
    'turbine id': 'turbine_id',
    'turbine_id': 'turbine_id',
    'turbineid': 'turbine_id',
    'turbine name': 'turbine_name',
    'turbine_name': 'turbine_name',
    'turbinename': 'turbine_name',
    'turbine make': 'turbine_make',
    'turbine_make': 'turbine_make',
    'turbinemake': 'turbine_make',
    'make': 'turbine_make',
    'oem': 'turbine_make',

    # Component / failure mode
    'component id': 'component_id',
    'component_id': 'component_id',
    'componentid': 'component_id',
    'component name': 'component_name',
    'component_name': 'component_name',
    'componentname': 'component_name',
    'component': 'component_name',
    'failure mode id': 'failure_mode_id',
    'failure_mode_id': 'failure_mode_id',
    'failuremodeid': 'failure_mode_id',
    'failure mode name': 'failure_mode_name',
    'failure_mode_name': 'failure_mode_name',
    'failuremodename': 'failure_mode_name',
    'failure mode': 'failure_mode_name',
    'failure_mode': 'failure_mode_name',
    'failuremode': 'failure_mode_name',

    # Classification
    'severity': 'severity',
    'priority': 'priority',
    'status': 'status',
    'priority changed': 'priority_changed',
    'priority_changed': 'priority_changed',
    'prioritychanged': 'priority_changed',

    # Timestamps
    'created at': 'created_at',
    'created_at': 'created_at',
    'createdat': 'created_at',
    'created': 'created_at',
    'inspected at': 'inspected_at',
    'inspected_at': 'inspected_at',
    'inspectedat': 'inspected_at',
    'confirmed at': 'confirmed_at',
    'confirmed_at': 'confirmed_at',
    'confirmedat': 'confirmed_at',
    'closed at': 'closed_at',
    'closed_at': 'closed_at',
    'closedat': 'closed_at',
    'updated at': 'updated_at',
    'updated_at': 'updated_at',
    'updatedat': 'updated_at',
    'deadline': 'deadline',
    'due date': 'deadline',
    'due_date': 'deadline',

    # Free text
    'activity': 'activity',
    'details': 'details',

    # Locations
    'latitude': 'latitude',
    'lat': 'latitude',
    'longitude': 'longitude',
    'lng': 'longitude',
    'lon': 'longitude',
    'long': 'longitude',
}

"""
Constants and configuration values for inspection comparison reports.
"""

# Detection conditions produced by the AI analysis step. The vocabulary is
# open: values outside this tuple are carried through as opaque strings.
CONDITION_NEW = 'new'
CONDITION_GOOD = 'good'
CONDITION_USED = 'used'
CONDITION_WORN = 'worn'
CONDITION_DAMAGED = 'damaged'
CONDITION_NOT_FOUND = 'not_found'

KNOWN_CONDITIONS = (
    CONDITION_NEW,
    CONDITION_GOOD,
    CONDITION_USED,
    CONDITION_WORN,
    CONDITION_DAMAGED,
    CONDITION_NOT_FOUND,
)

CONDITION_LABELS = {
    CONDITION_NEW: 'New',
    CONDITION_GOOD: 'Good',
    CONDITION_USED: 'Used',
    CONDITION_WORN: 'Worn',
    CONDITION_DAMAGED: 'Damaged',
    CONDITION_NOT_FOUND: 'Not found',
}

INSPECTION_ENTRY = 'entry'
INSPECTION_EXIT = 'exit'

# Key under which the AI analysis payload lists detected objects
ANALYSIS_OBJECTS_KEY = 'objectsDetected'

# Page-break planning
MIN_FILL_RATIO = 0.3
# Upper bound on planned pages; larger content/page ratios are not paginated
MAX_PAGE_COUNT = 10000

# A4 portrait in PDF points
A4_WIDTH_PT = 595.28
A4_HEIGHT_PT = 841.89
DEFAULT_MARGIN_PT = 28.35  # 1 cm
DEFAULT_RENDER_SCALE = 2.0  # surface pixels per point

# Comparison buckets in display order
BUCKET_ORDER = ('changed', 'new', 'missing', 'unchanged')

REPORT_LABELS = {
    'title': 'Inspection Comparison Report',
    'details': 'Inspection Details',
    'company': 'Company',
    'inspector': 'Inspector',
    'property': 'Property',
    'address': 'Address',
    'entry_date': 'Entry date',
    'exit_date': 'Exit date',
    'notes': 'Inspection Notes',
    'summary': 'Summary of Differences',
    'entry': 'Entry',
    'exit': 'Exit',
    'no_photo': 'No photo',
    'not_informed': 'Not informed',
    'changed': 'Items with Changed Condition',
    'new': 'New Items at Exit',
    'missing': 'Items Missing at Exit',
    'unchanged': 'Unchanged Items',
}

INSPECTION_NOTES = (
    'This report records the state of conservation and operation of the '
    'property on the inspection dates.',
    'The inspection was carried out by visual observation, assessing '
    'aesthetics, finishes and the apparent operation of the property.',
    'Structural analyses, foundations, construction soundness and hidden '
    'defects not perceptible at the time of inspection are not covered.',
)

# Surface colours (RGB)
REPORT_COLORS = {
    'background': (255, 255, 255),
    'text': (31, 41, 55),
    'muted': (107, 114, 128),
    'rule': (229, 231, 235),
    'placeholder': (226, 232, 240),
    'changed': (202, 138, 4),
    'new': (22, 163, 74),
    'missing': (220, 38, 38),
    'unchanged': (37, 99, 235),
}

DEFAULT_FONT_CANDIDATES = (
    '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf',
    '/usr/share/fonts/dejavu/DejaVuSans.ttf',
)

DEFAULT_BOLD_FONT_CANDIDATES = (
    '/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf',
    '/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf',
)

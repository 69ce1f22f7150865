"""Display names, colors and notation shared by the renderers."""

MODEL_NAMES = {
    'constant': 'Constant Dividend',
    'growth': 'Constant Growth',
    'changing': 'Changing Growth',
}

# Used in screen-reader announcements where space is short.
MODEL_SHORT_NAMES = {
    'constant': 'Constant',
    'growth': 'Growth',
    'changing': 'Two-stage',
}

MODEL_COLORS = {
    'constant': '#3c6ae5',
    'growth': '#15803d',
    'changing': '#7a46ff',
}

PRICE_NOTATION = {
    'constant': 'P',
    'growth': 'PV_t',
    'changing': 'PV_0',
}

DARK_TEXT = '#06005a'
LABEL_TEXT = '#1f2937'
